# Routes package initialization
# This package contains all API routes organized by functionality

from .ripeness import ripeness_bp

__all__ = ['ripeness_bp']
