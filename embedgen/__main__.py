# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Main entry point for running embedgen as a module.

Enables running: python -m embedgen generate
"""

from .cli import main

if __name__ == '__main__':
    main()
