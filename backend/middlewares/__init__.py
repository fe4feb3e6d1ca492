"""
Middlewares package initialization.
Exports authentication decorators.
"""

from .decorators import login_required, role_required, current_context

__all__ = ['login_required', 'role_required', 'current_context']
