# -*- coding: utf-8 -*-
"""Prompt assistant backend: provider registry and model cache."""

__version__ = "0.1.0"
