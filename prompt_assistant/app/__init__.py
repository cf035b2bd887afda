# -*- coding: utf-8 -*-
from ._app import create_app, setup_logging

__all__ = ["create_app", "setup_logging"]
