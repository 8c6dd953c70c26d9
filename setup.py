# This file is part of firstboot. See LICENSE file for license information.

# Distutils magic for firstboot

import os
import platform
import sys
from glob import glob

import setuptools
from setuptools.command.install import install
from setuptools.errors import OptionError

# Python-path here is a little unpredictable as setup.py could be run
# from a directory other than the root of the repo, so ensure we can find
# our utils
sys.path.insert(0, os.path.dirname(os.path.realpath(__file__)))
# isort: off
from setup_utils import get_version, is_f, read_requires  # noqa: E402

# isort: on
del sys.path[0]

INITSYS_FILES = {
    "sysvinit_openbsd": lambda: [
        f for f in glob("sysvinit/openbsd/*") if is_f(f)
    ],
}
INITSYS_ROOTS = {
    "sysvinit_openbsd": "/etc/rc.d",
}
INITSYS_TYPES = sorted(INITSYS_ROOTS.keys())


class InitsysInstallData(install):
    init_system = None
    user_options = install.user_options + [
        # This will magically show up in member variable 'init_sys'
        (
            "init-system=",
            None,
            "init system(s) to configure (%s) [default: None]"
            % ", ".join(INITSYS_TYPES),
        ),
    ]

    def initialize_options(self):
        install.initialize_options(self)
        self.init_system = ""

    def finalize_options(self):
        install.finalize_options(self)

        if self.init_system and isinstance(self.init_system, str):
            self.init_system = self.init_system.split(",")

        if len(self.init_system) == 0 and platform.system() == "OpenBSD":
            self.init_system = ["sysvinit_openbsd"]

        bad = [f for f in self.init_system if f not in INITSYS_TYPES]
        if len(bad) != 0:
            raise OptionError(
                "Invalid --init-system: %s" % ",".join(bad)
            )

        for system in self.init_system:
            files = INITSYS_FILES[system]()
            if files:
                self.distribution.data_files.append(
                    (INITSYS_ROOTS[system], files)
                )
        # Force that command to reinitialize (with new file list)
        self.distribution.reinitialize_command("install_data", True)


data_files = [
    ("/usr/local/share/examples/firstboot", glob("config/*.cfg")),
]

# Use a subclass for install that handles
# adding on the right init system configuration files
cmdclass = {
    "install": InitsysInstallData,
}

requirements = read_requires()

setuptools.setup(
    name="firstboot",
    version=get_version(),
    description="First boot provisioning of OpenBSD instances from a "
    "config drive",
    packages=setuptools.find_packages(exclude=["tests.*", "tests"]),
    python_requires=">=3.8",
    license="ISC",
    data_files=data_files,
    install_requires=requirements,
    extras_require={
        "test": read_requires("test-requirements.txt"),
    },
    cmdclass=cmdclass,
    entry_points={
        "console_scripts": [
            "firstboot = firstboot.cmd.main:main",
        ],
    },
)
