"""
elfscope Shared Module
======================

Configuration, logging and console helpers used by the elfscope decoder
and its command-line interface.
"""

from elfscope.shared.config import ScopeConfig, get_config

__all__ = ["ScopeConfig", "get_config"]
