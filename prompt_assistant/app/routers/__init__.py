# -*- coding: utf-8 -*-
from .models import router as models_router
from .providers import router as providers_router

__all__ = ["models_router", "providers_router"]
