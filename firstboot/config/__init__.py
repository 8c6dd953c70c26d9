# This file is part of firstboot. See LICENSE file for license information.

import importlib

Config = dict

# This prefix is used to make it less
# of a chance that when importing
# we will not find something else with the same
# name in the lookup path...
MOD_PREFIX = "cc_"


def form_module_name(name):
    canon_name = name.replace("-", "_")
    if canon_name.lower().endswith(".py"):
        canon_name = canon_name[0 : (len(canon_name) - 3)]
    canon_name = canon_name.strip()
    if not canon_name:
        return None
    if not canon_name.startswith(MOD_PREFIX):
        canon_name = "%s%s" % (MOD_PREFIX, canon_name)
    return canon_name


def fetch_module(name):
    mod_name = form_module_name(name)
    if not mod_name:
        raise ValueError("Invalid config module name %r" % name)
    return importlib.import_module("%s.%s" % (__name__, mod_name))
