# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Error taxonomy for the mission analysis engine."""


class InvalidInputError(ValueError):
    """Raised when a mission parameter is outside its physical domain."""
