# This file is part of firstboot. See LICENSE file for license information.

import pytest

from firstboot.config import cc_keys_to_console

M_PATH = "firstboot.config.cc_keys_to_console."


@pytest.fixture
def host_keys(tmpdir):
    ssh_dir = tmpdir.join("etc", "ssh")
    ssh_dir.ensure(dir=True)
    ssh_dir.join("ssh_host_rsa_key.pub").write("ssh-rsa AAAArsa root@h\n")
    ssh_dir.join("ssh_host_ed25519_key.pub").write("ssh-ed25519 AAAAed\n")
    ssh_dir.join("ssh_host_ed25519_key").write("PRIVATE\n")
    return ssh_dir


class TestHandle:
    def test_emits_public_keys_between_delimiters(
        self, cfg, host_keys, mocker
    ):
        m_multi_log = mocker.patch(M_PATH + "multi_log")
        cc_keys_to_console.handle("keys_to_console", cfg, None, [])
        m_multi_log.assert_called_once_with(
            "-----BEGIN SSH HOST KEY KEYS-----\n"
            "ssh-ed25519 AAAAed\n"
            "ssh-rsa AAAArsa root@h\n"
            "-----END SSH HOST KEY KEYS-----\n",
            stderr=False,
            console=True,
        )

    def test_disabled(self, cfg, host_keys, mocker):
        m_multi_log = mocker.patch(M_PATH + "multi_log")
        cfg["emit_keys_to_console"] = False
        cc_keys_to_console.handle("keys_to_console", cfg, None, [])
        assert 0 == m_multi_log.call_count

    def test_no_keys_still_emits_delimiters(self, cfg, mocker, caplog):
        m_multi_log = mocker.patch(M_PATH + "multi_log")
        cc_keys_to_console.handle("keys_to_console", cfg, None, [])
        m_multi_log.assert_called_once_with(
            "-----BEGIN SSH HOST KEY KEYS-----\n"
            "-----END SSH HOST KEY KEYS-----\n",
            stderr=False,
            console=True,
        )
        assert "No SSH host keys found" in caplog.text


class TestFormatHostKeys:
    def test_unreadable_key_skipped(self, tmpdir, caplog):
        good = tmpdir.join("good.pub")
        good.write("ssh-ed25519 AAAA\n")
        content = cc_keys_to_console.format_host_keys(
            [tmpdir.join("missing.pub").strpath, good.strpath]
        )
        assert "ssh-ed25519 AAAA" == content.splitlines()[1]
        assert "Failed to read host key" in caplog.text
