# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

CLI_NAME = "embedgen"
PACKAGE_NAME = "embedgen"


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    INTERRUPTED = 130  # Standard SIGINT exit code
