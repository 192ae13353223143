"""
Gilgrimi Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of thresholds and limits
- Secure handling of secrets
"""

from gilgrimi.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
