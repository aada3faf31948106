"""KSTool - terminal dashboard for Kubernetes batch jobs."""

from kstool.constants.values import APP_VERSION

__version__ = APP_VERSION
