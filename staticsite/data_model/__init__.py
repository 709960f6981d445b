"""Shared data model helpers."""

from staticsite.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
