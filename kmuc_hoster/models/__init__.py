"""Data models for kmuc-hoster."""
from kmuc_hoster.models.answers import (
    DEFAULT_PORTS,
    CloudProvider,
    Database,
    DeploymentTarget,
    ProjectAnswers,
    ProjectType,
    default_port_for,
)

__all__ = [
    'DEFAULT_PORTS',
    'CloudProvider',
    'Database',
    'DeploymentTarget',
    'ProjectAnswers',
    'ProjectType',
    'default_port_for',
]
