# This file is part of firstboot. See LICENSE file for license information.

import copy as obj_copy
import grp
import io
import json
import logging
import os
import pwd
import re
from typing import Dict, Mapping, Optional, Sequence, Union

import yaml

from firstboot import subp
from firstboot.log.log_util import logexc

LOG = logging.getLogger(__name__)

FALSE_STRINGS = ("off", "0", "no", "false")

# Linux: /dev/sda1 on /boot type ext4 (rw,relatime)
# OpenBSD: /dev/cd0c on /mnt/configdrive type cd9660 (local, read-only)
# FreeBSD: /dev/vtbd0p2 on / (ufs, local, journaled soft-updates)
MOUNT_RE = re.compile(
    r"^(?P<dev>/dev/\S+) on (?P<mp>/.*?)"
    r"(?: type (?P<fstype>\S+))? \((?P<opts>.*)\)$"
)


class MountFailedError(Exception):
    pass


def decode_binary(blob: Union[str, bytes], encoding="utf-8") -> str:
    # Converts a binary type into a text type using given encoding.
    return blob if isinstance(blob, str) else blob.decode(encoding=encoding)


def encode_text(text: Union[str, bytes], encoding="utf-8") -> bytes:
    # Converts a text string into a binary type using given encoding.
    return text if isinstance(text, bytes) else text.encode(encoding=encoding)


def is_false(val, addons=None):
    if isinstance(val, bool):
        return val is False
    check_set = FALSE_STRINGS
    if addons:
        check_set = list(check_set) + addons
    return str(val).lower().strip() in check_set


def get_cfg_option_list(yobj, key, default=None):
    """
    Gets the C{key} config option from C{yobj} as a list of strings. If the
    key is present as a single string it will be returned as a list with one
    string arg.

    @param yobj: The configuration object.
    @param key: The configuration key to get.
    @param default: The default to return if key is not found.
    @return: The configuration option as a list of strings or default if key
        is not found.
    """
    if key not in yobj:
        return default
    if yobj[key] is None:
        return []
    val = yobj[key]
    if isinstance(val, (list)):
        cval = [v for v in val]
        return cval
    if not isinstance(val, str):
        val = str(val)
    return [val]


def get_cfg_by_path(yobj, keyp, default=None):
    """Return the value of the item at path C{keyp} in C{yobj}.

    example:
      get_cfg_by_path({'a': {'b': {'num': 4}}}, 'a/b/num') == 4
      get_cfg_by_path({'a': {'b': {'num': 4}}}, 'c/d') == None

    @param yobj: A dictionary.
    @param keyp: A path inside yobj.  it can be a '/' delimited string,
                 or an iterable.
    @param default: The default to return if the path does not exist.
    @return: The value of the item at keyp."
    is not found."""

    if isinstance(keyp, str):
        keyp = keyp.split("/")
    cur = yobj
    for tok in keyp:
        if not isinstance(cur, dict) or tok not in cur:
            return default
        cur = cur[tok]
    return cur


def mergemanydict(sources: Sequence[Mapping], reverse=False) -> dict:
    """Merge multiple dicts, highest priority first.

    Nested dicts are merged recursively; for any other value the first
    source that defines a key wins.

    mergemanydict([{"a": 1, "d": {"a": 1}}, {"a": 10, "d": {"f": 10}}])
    results in {"a": 1, "d": {"a": 1, "f": 10}}
    """
    if reverse:
        sources = list(reversed(sources))
    merged_cfg: dict = {}
    for cfg in sources:
        if cfg:
            merged_cfg = _merge_missing(merged_cfg, cfg)
    return merged_cfg


def _merge_missing(merged: dict, other: Mapping) -> dict:
    for key, value in other.items():
        if key not in merged:
            merged[key] = obj_copy.deepcopy(value)
        elif isinstance(merged[key], dict) and isinstance(value, Mapping):
            merged[key] = _merge_missing(merged[key], value)
    return merged


def load_yaml(blob, default=None, allowed=(dict,)):
    loaded = default
    blob = decode_binary(blob)
    try:
        LOG.debug(
            "Attempting to load yaml from string "
            "of length %s with allowed root types %s",
            len(blob),
            allowed,
        )
        converted = yaml.safe_load(blob)
        if converted is None:
            LOG.debug("loaded blob returned None, returning default.")
            converted = default
        elif not isinstance(converted, allowed):
            # Yes this will just be caught, but thats ok for now...
            raise TypeError(
                "Yaml load allows %s root types, but got %s instead"
                % (allowed, type(converted).__name__)
            )
        loaded = converted
    except (yaml.YAMLError, TypeError, ValueError) as e:
        msg = "Failed loading yaml blob"
        mark = getattr(e, "context_mark", None) or getattr(
            e, "problem_mark", None
        )
        if mark:
            msg += (
                '. Invalid format at line {line} column {col}: "{err}"'.format(
                    line=mark.line + 1, col=mark.column + 1, err=e
                )
            )
        else:
            msg += ". {err}".format(err=e)
        LOG.warning(msg)
    return loaded


def load_json(text, root_types=(dict,)):
    decoded = json.loads(decode_binary(text))
    if not isinstance(decoded, tuple(root_types)):
        expected_types = ", ".join([str(t) for t in root_types])
        raise TypeError(
            "(%s) root types expected, got %s instead"
            % (expected_types, type(decoded))
        )
    return decoded


def read_conf(fname) -> Dict:
    """Read a yaml config and convert to dict"""
    try:
        config_file = load_text_file(fname)
    except FileNotFoundError:
        return {}
    return load_yaml(config_file, default={})


def load_binary_file(fname: Union[str, os.PathLike], *, quiet=False) -> bytes:
    LOG.debug("Reading from %s (quiet=%s)", fname, quiet)
    with io.BytesIO() as ofh:
        try:
            with open(fname, "rb") as ifh:
                ofh.write(ifh.read())
        except FileNotFoundError:
            if not quiet:
                raise
        contents = ofh.getvalue()
    LOG.debug("Read %s bytes from %s", len(contents), fname)
    return contents


def load_text_file(fname: Union[str, os.PathLike], *, quiet=False) -> str:
    return decode_binary(load_binary_file(fname, quiet=quiet))


def uniq_list(in_list):
    out_list = []
    for i in in_list:
        if i in out_list:
            continue
        else:
            out_list.append(i)
    return out_list


def safe_int(possible_int):
    try:
        return int(possible_int)
    except (ValueError, TypeError):
        return None


def chmod(path, mode):
    real_mode = safe_int(mode)
    if path and real_mode:
        os.chmod(path, real_mode)


def chownbyid(fname, uid=None, gid=None):
    if uid in [None, -1] and gid in [None, -1]:
        # Nothing to do
        return
    LOG.debug("Changing the ownership of %s to %s:%s", fname, uid, gid)
    os.chown(fname, uid, gid)


def chownbyname(fname, user=None, group=None):
    uid = -1
    gid = -1
    try:
        if user:
            uid = pwd.getpwnam(user).pw_uid
        if group:
            gid = grp.getgrnam(group).gr_gid
    except KeyError as e:
        raise OSError("Unknown user or group: %s" % (e)) from e
    chownbyid(fname, uid, gid)


def ensure_dir(path, mode=None, user=None, group=None):
    if not os.path.isdir(path):
        os.makedirs(path)
        chmod(path, mode)
        if user or group:
            chownbyname(path, user, group)
    else:
        # Just adjust the mode
        chmod(path, mode)


def write_file(
    filename,
    content,
    mode=0o644,
    omode="wb",
    *,
    ensure_dir_exists=True,
):
    """
    Writes a file with the given content and sets the file mode as specified.

    @param filename: The full path of the file to write.
    @param content: The content to write to the file.
    @param mode: The filesystem mode to set on the file.
    @param omode: The open mode used when opening the file (w, wb, a, etc.)
    @param ensure_dir_exists: If True (the default), ensure that the directory
                              containing `filename` exists before writing to
                              the file.
    """
    if ensure_dir_exists:
        ensure_dir(os.path.dirname(filename))
    if "b" in omode.lower():
        content = encode_text(content)
        write_type = "bytes"
    else:
        content = decode_binary(content)
        write_type = "characters"
    try:
        mode_r = "%o" % mode
    except TypeError:
        mode_r = "%r" % mode
    LOG.debug(
        "Writing to %s - %s: [%s] %s %s",
        filename,
        omode,
        mode_r,
        len(content),
        write_type,
    )
    with open(filename, omode) as fh:
        fh.write(content)
        fh.flush()
    chmod(filename, mode)


def append_file(path, content):
    write_file(path, content, omode="ab", mode=None)


def mounts() -> Dict[str, dict]:
    """Return currently mounted devices keyed by device path."""
    mounted = {}
    try:
        out = subp.subp(["mount"])
        for mpline in out.stdout.splitlines():
            m = MOUNT_RE.match(mpline)
            if not m:
                continue
            # If the name of the mount point contains spaces these
            # can be escaped as '\040', so undo that..
            mounted[m.group("dev")] = {
                "fstype": m.group("fstype"),
                "mountpoint": m.group("mp").replace("\\040", " "),
                "opts": m.group("opts"),
            }
        LOG.debug("Fetched %s mounts", mounted)
    except (IOError, OSError):
        logexc(LOG, "Failed fetching mount points")
    return mounted


def is_mounted(device: str, mountpoint: Optional[str] = None) -> bool:
    entry = mounts().get(device)
    if not entry:
        return False
    if mountpoint is None:
        return True
    return os.path.normpath(entry["mountpoint"]) == os.path.normpath(
        mountpoint
    )


def mount(device: str, mountpoint: str, mtype: Optional[str] = None):
    """Mount device read-only on mountpoint.

    Succeeds without doing anything if device is already mounted there.
    Raises MountFailedError otherwise.
    """
    if is_mounted(device, mountpoint):
        LOG.debug("%s already mounted on %s", device, mountpoint)
        return
    mountcmd = ["mount", "-r"]
    if mtype:
        mountcmd.extend(["-t", mtype])
    mountcmd.extend([device, mountpoint])
    try:
        ensure_dir(mountpoint)
        subp.subp(mountcmd)
    except (IOError, OSError) as exc:
        raise MountFailedError(
            "Failed mounting %s to %s due to: %s" % (device, mountpoint, exc)
        ) from exc
    LOG.debug("Mounted %s on %s", device, mountpoint)


def unmount(mountpoint: str):
    subp.subp(["umount", mountpoint])

