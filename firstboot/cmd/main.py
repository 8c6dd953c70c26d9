#!/usr/bin/env python3

# This file is part of firstboot. See LICENSE file for license information.

import argparse
import logging
import sys
import time

from firstboot import atomic_helper, stages, subp, util, version
from firstboot.log import log_util, loggers

LOG = logging.getLogger(__name__)

# Welcome message template
WELCOME_MSG_TPL = "firstboot v. {version} running '{action}' at {timestamp}."

# Errors that abort provisioning before later stages run
FATAL_ERRORS = (
    util.MountFailedError,
    subp.ProcessExecutionError,
    ValueError,
    OSError,
)


def welcome(action):
    msg = WELCOME_MSG_TPL.format(
        version=version.version_string(),
        action=action,
        timestamp=time.strftime("%a, %d %b %Y %H:%M:%S %z", time.gmtime()),
    )
    LOG.info(msg)


def main_run(name, args):
    init = stages.Init(args.cfg)
    welcome(name)
    mod_args = ["no-reconcile"] if args.no_reconcile else []
    try:
        init.run(mod_args, force=args.force)
    except FATAL_ERRORS as e:
        util.logexc(LOG, "Provisioning failed: %s", e, log_level=logging.ERROR)
        return 1
    except Exception:
        LOG.exception("Unexpected failure while provisioning")
        return 1
    return 0


def main_query(name, args):
    init = stages.Init(args.cfg)
    try:
        try:
            cloud = init.fetch()
        except FATAL_ERRORS as e:
            return log_util.error(str(e))
        network = cloud.network_metadata._asdict()
        network["dns_services"] = cloud.network_metadata.dns_addresses
        print(
            atomic_helper.json_dumps(
                {
                    "interface": cloud.interface,
                    "network": network,
                    "user": cloud.user_metadata._asdict(),
                }
            )
        )
    finally:
        init.datasource.unmount()
    return 0


def main(sysv_args=None):
    if not sysv_args:
        sysv_args = sys.argv
    parser = argparse.ArgumentParser(prog=sysv_args[0])

    # Top level args
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version="%(prog)s " + (version.version_string()),
        help="Show program's version number and exit.",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Show additional pre-action logging (default: %(default)s).",
        default=False,
    )
    parser.add_argument(
        "--file",
        "-f",
        dest="cfg_file",
        help="Configuration file overriding the builtin defaults.",
        default=None,
    )

    subparsers = parser.add_subparsers(title="Subcommands", dest="subcommand")

    parser_run = subparsers.add_parser(
        "run", help="Provision this machine from the config drive."
    )
    parser_run.add_argument(
        "--force",
        action="store_true",
        help="Run even if provisioning already completed once.",
        default=False,
    )
    parser_run.add_argument(
        "--no-reconcile",
        dest="no_reconcile",
        action="store_true",
        help="Write configuration but do not touch running services.",
        default=False,
    )
    parser_run.set_defaults(action=("run", main_run))

    parser_query = subparsers.add_parser(
        "query", help="Print the parsed config drive metadata as JSON."
    )
    parser_query.set_defaults(action=("query", main_query))

    args = parser.parse_args(args=sysv_args[1:])
    if not args.subcommand:
        # Without a subcommand behave as the rc script expects: provision.
        args = parser.parse_args(args=sysv_args[1:] + ["run"])

    if args.debug:
        loggers.setup_basic_logging()
    args.cfg = stages.read_runtime_config(args.cfg_file)
    loggers.setup_logging(args.cfg)

    (name, functor) = args.action
    retval = functor(name, args)
    loggers.flush_loggers(logging.getLogger())
    return retval


if __name__ == "__main__":
    sys.exit(main(sys.argv))
