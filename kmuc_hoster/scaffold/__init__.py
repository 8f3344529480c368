"""Template renderers for the files written by ``kmuc-hoster init``.

Every renderer is a pure function of ProjectAnswers.
"""

from .compose import build_compose, generate_docker_compose
from .deploy import DeploymentScriptGenerator, GeneratedFile, render_deploy_files
from .dockerfile import generate_dockerfile
from .project_files import generate_dockerignore, generate_env_example, generate_project_readme

__all__ = [
    "DeploymentScriptGenerator",
    "GeneratedFile",
    "build_compose",
    "generate_docker_compose",
    "generate_dockerfile",
    "generate_dockerignore",
    "generate_env_example",
    "generate_project_readme",
    "render_deploy_files",
]
