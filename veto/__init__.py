# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import ConfigurationError, InvalidEntity, OptionNotFoundError, VetoError
from .check import (
    Check,
    CheckOptions,
    GreaterThanOrEqualToCheck,
    MaxLengthCheck,
    PresenceCheck,
    register_check,
)
from .checker import Checker, CheckContext, MethodRule, Rule
from .config import VetoSettings, settings
from .errors import ErrorEntry, Errors
from .validator import Validator
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL)

__all__ = (
    "__version__",
    # validation
    "Validator",
    "Checker",
    "CheckContext",
    "Rule",
    "MethodRule",
    "Errors",
    "ErrorEntry",
    # checks
    "Check",
    "CheckOptions",
    "PresenceCheck",
    "MaxLengthCheck",
    "GreaterThanOrEqualToCheck",
    "register_check",
    # configuration
    "VetoSettings",
    "settings",
    # exceptions
    "VetoError",
    "ConfigurationError",
    "OptionNotFoundError",
    "InvalidEntity",
)
