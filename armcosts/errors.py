# armcosts/errors.py
from __future__ import annotations


class ArmCostsError(Exception):
    """Base class for every error raised by armcosts."""


class SkipResourceError(ArmCostsError):
    """
    A single change could not be estimated. The batch logs it, leaves the
    resource out of the totals and moves on to the next change.
    """


class MissingResourceIdError(SkipResourceError):
    pass


class MissingDesiredStateError(SkipResourceError):
    pass


class InvalidResourceIdError(SkipResourceError, ValueError):
    pass


class LocationUnavailableError(SkipResourceError):
    pass


class MissingFieldError(SkipResourceError):
    pass


class UnknownSkuError(SkipResourceError, KeyError):
    def __init__(self, sku: object) -> None:
        super().__init__(sku)
        self.sku = sku

    def __str__(self) -> str:
        return f"SKU is not yet supported - {self.sku}"


class NoCatalogDataError(SkipResourceError):
    pass


class CatalogFetchError(SkipResourceError):
    pass


class StrategyConstructionError(SkipResourceError):
    pass


class BrokenAncestorChainError(ArmCostsError):
    """The parent chain of a resource id never reaches a root scope."""


class WhatIfCommandError(ArmCostsError):
    pass
