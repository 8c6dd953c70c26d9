# This file is part of firstboot. See LICENSE file for license information.

import collections.abc
import io
import logging
import logging.config
import os
import sys
from contextlib import suppress

DEFAULT_LOG_FORMAT = "%(asctime)s - %(filename)s[%(levelname)s]: %(message)s"


def setup_basic_logging(level=logging.DEBUG, formatter=None):
    formatter = formatter or logging.Formatter(DEFAULT_LOG_FORMAT)
    root = logging.getLogger()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.setLevel(level)
    root.addHandler(console)
    root.setLevel(level)


def setup_file_logging(log_file, level=logging.DEBUG, formatter=None):
    formatter = formatter or logging.Formatter(DEFAULT_LOG_FORMAT)
    root = logging.getLogger()
    try:
        handler = logging.FileHandler(log_file)
    except OSError as e:
        sys.stderr.write("WARN: unable to log to %s: %s\n" % (log_file, e))
        return
    handler.setFormatter(formatter)
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(min(level, root.level) if root.level else level)


def flush_loggers(root):
    if not root:
        return
    for h in root.handlers:
        if isinstance(h, (logging.StreamHandler)):
            with suppress(IOError):
                h.flush()
    flush_loggers(root.parent)


def setup_logging(cfg=None):
    # See if the config provides any logging conf...
    if not cfg:
        cfg = {}

    log_cfgs = []
    for a_cfg in cfg.get("log_cfgs") or []:
        if isinstance(a_cfg, str):
            log_cfgs.append(a_cfg)
        elif isinstance(a_cfg, (collections.abc.Iterable)):
            cfg_str = [str(c) for c in a_cfg]
            log_cfgs.append("\n".join(cfg_str))
        else:
            log_cfgs.append(str(a_cfg))

    # log_cfg may contain either a filepath to a file containing a logger
    # configuration, or a string containing a logger configuration
    # https://docs.python.org/3/library/logging.config.html#logging-config-fileformat
    for log_cfg in log_cfgs:
        with suppress(FileNotFoundError):
            # If the value is not a filename, assume that it is a config.
            if not (log_cfg.startswith("/") and os.path.isfile(log_cfg)):
                log_cfg = io.StringIO(log_cfg)

            # Attempt to load its config.
            logging.config.fileConfig(log_cfg, disable_existing_loggers=False)

            # Use the first valid configuration.
            return

    # If it didn't work, at least setup a basic logger
    if not logging.getLogger().handlers:
        setup_basic_logging(logging.INFO)
    log_file = cfg.get("def_log_file")
    if log_file:
        setup_file_logging(log_file)

