"""Utility helpers."""

from .indicator_css import build_indicator_css, split_size
from .query_params import parse_data_params, update_query_param

__all__ = ["build_indicator_css", "split_size", "parse_data_params", "update_query_param"]
