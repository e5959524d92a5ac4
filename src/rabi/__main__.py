#!/usr/bin/env python
# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT
"""
__main__ module for rabi.

Enables use as module: $ python -m rabi
"""


if __name__ == '__main__':
    from . import cli

    cli.cli()
