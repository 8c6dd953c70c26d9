import os
import re
from typing import List

TOP_DIR = os.path.dirname(os.path.realpath(__file__))


def is_f(p: str) -> bool:
    return os.path.isfile(p)


def version_to_pep440(version: str) -> str:
    # A git describe style 1.2.0-15-g7f97aee24 is invalid under PEP 440.
    # If we replace the first - with a + that should give us a valid version.
    return version.replace("-", "+", 1)


def get_version() -> str:
    with open(os.path.join(TOP_DIR, "firstboot", "version.py")) as fh:
        m = re.search(r'^__VERSION__\s*=\s*"([^"]+)"', fh.read(), re.M)
    if not m:
        raise RuntimeError("No __VERSION__ in firstboot/version.py")
    return version_to_pep440(m.group(1))


def read_requires(fname="requirements.txt") -> List[str]:
    deps = []
    with open(os.path.join(TOP_DIR, fname)) as fh:
        for line in fh:
            line = line.split("#", 1)[0].strip()
            if line:
                deps.append(line)
    return deps
