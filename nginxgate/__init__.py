"""nginxgate - terminal console for reviewing and rolling out nginx configuration."""

__version__ = "0.1.0"
