"""Interactive 3D scatter plot of labeled words ("semantic space")."""

__version__ = "0.1.0"
