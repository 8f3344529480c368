"""Shared test fixtures for kmuc-hoster tests."""
import pytest

from kmuc_hoster.core.config import reset_config
from kmuc_hoster.core.logger import reset_file_logging
from kmuc_hoster.core.progress_store import ProgressStore
from kmuc_hoster.models.answers import ProjectAnswers


@pytest.fixture(autouse=True)
def kmuc_home(tmp_path, monkeypatch):
    """Keep the global progress slot out of the real home directory."""
    home = tmp_path / "kmuc-home"
    monkeypatch.setenv("KMUC_HOME", str(home))
    reset_config()
    yield home
    reset_config()


@pytest.fixture(autouse=True)
def file_logging():
    """Drop any log file handler a test (or a verbose init) attached."""
    yield
    reset_file_logging()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Empty project directory used as the working directory."""
    path = tmp_path / "project"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def store(kmuc_home):
    return ProgressStore(kmuc_home / ".kmuc-progress.json")


@pytest.fixture
def local_answers():
    """Express API with Postgres, developed locally."""
    return ProjectAnswers.from_answers({
        "projectName": "shop-api",
        "projectType": "express",
        "useDefaultPort": True,
        "database": "postgres",
        "deploymentTarget": "local",
    })


@pytest.fixture
def vps_answers():
    """Next.js app on a VPS with domain and SSL."""
    return ProjectAnswers.from_answers({
        "projectName": "storefront",
        "projectType": "nextjs",
        "useDefaultPort": True,
        "database": "mysql",
        "deploymentTarget": "vps",
        "needsDomain": True,
        "domain": "shop.example.com",
        "serverIP": "203.0.113.10",
        "serverUser": "deploy",
        "serverPort": "2222",
    })


@pytest.fixture
def cloud_answers():
    """Static site on a cloud provider without a domain."""
    return ProjectAnswers.from_answers({
        "projectName": "landing",
        "projectType": "static",
        "useDefaultPort": True,
        "database": "none",
        "deploymentTarget": "cloud",
        "needsDomain": False,
        "cloudProvider": "hetzner",
    })
