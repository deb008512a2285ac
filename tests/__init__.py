# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""embedgen test suite."""
