"""Tests for the init, progress and version commands."""
import json

import yaml
from typer.testing import CliRunner

from kmuc_hoster import __version__
from kmuc_hoster.cli import app
from kmuc_hoster.core.config import reset_config
from kmuc_hoster.core.logger import reset_file_logging
from kmuc_hoster.core.progress_store import ProgressStore
from kmuc_hoster.core.steps import InitStep

runner = CliRunner()

# projectName, projectType, useDefaultPort, database, deploymentTarget
LOCAL_EXPRESS_POSTGRES = "shop-api\nexpress\ny\npostgres\nlocal\n"


def test_main_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "init" in result.stdout
    assert "progress" in result.stdout
    assert "version" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


class TestInitFresh:

    def test_local_express_postgres(self, project_dir):
        result = runner.invoke(app, ["init"], input=LOCAL_EXPRESS_POSTGRES)

        assert result.exit_code == 0, result.stdout
        assert "Setup complete" in result.stdout

        assert "FROM node:20-alpine" in (project_dir / "Dockerfile").read_text()
        compose = yaml.safe_load((project_dir / "docker-compose.yml").read_text())
        assert set(compose["services"]) == {"app", "postgres"}
        assert compose["services"]["app"]["depends_on"] == ["postgres"]
        env = (project_dir / ".env.example").read_text()
        for name in ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB", "DATABASE_URL"):
            assert name in env
        assert not (project_dir / "scripts" / "deploy.sh").exists()
        assert ProgressStore().exists() is False

    def test_vps_with_domain(self, project_dir):
        replies = "\n".join([
            "storefront",      # projectName
            "nextjs",          # projectType
            "n",               # useDefaultPort
            "8080",            # port
            "none",            # database
            "vps",             # deploymentTarget
            "y",               # needsDomain
            "shop.example.com",
            "203.0.113.10",    # serverIP
            "",                # serverUser (default root)
            "",                # serverPort (default 22)
        ]) + "\n"

        result = runner.invoke(app, ["init"], input=replies)

        assert result.exit_code == 0, result.stdout
        deploy = (project_dir / "scripts" / "deploy.sh").read_text()
        assert 'SERVER_USER="root"' in deploy
        assert (project_dir / "scripts" / "setup-domain.sh").exists()
        assert "proxy_pass http://app:8080;" in (project_dir / "nginx.conf").read_text()

    def test_refuses_filesystem_root(self, monkeypatch):
        monkeypatch.chdir("/")

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "filesystem root" in result.stdout
        assert result.stdout.index("filesystem root") < result.stdout.index("Create a project directory")
        assert ProgressStore().exists() is False

    def test_refuses_root_directory_option(self, project_dir):
        result = runner.invoke(app, ["init", "--directory", "/"])

        assert result.exit_code == 1
        assert not (project_dir / "Dockerfile").exists()

    def test_step_failure_exits_with_resume_hint(self, project_dir):
        (project_dir / "docker-compose.yml").mkdir()

        result = runner.invoke(app, ["init"], input=LOCAL_EXPRESS_POSTGRES)

        assert result.exit_code == 1
        assert "init' again to resume" in result.stdout
        assert "Traceback" not in result.stdout
        state = ProgressStore().load()
        assert state.current_step is InitStep.DOCKER_COMPOSE
        assert state.answers["projectName"] == "shop-api"

    def test_step_failure_without_saved_progress_warns_start_over(self, project_dir, tmp_path, monkeypatch):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")
        monkeypatch.setenv("KMUC_HOME", str(blocker))
        reset_config()
        (project_dir / "docker-compose.yml").mkdir()

        result = runner.invoke(app, ["init"], input=LOCAL_EXPRESS_POSTGRES)

        assert result.exit_code == 1
        assert "Could not save progress" in result.stdout
        assert "will start over" in result.stdout
        assert "again to resume" not in result.stdout

    def test_verbose_log_file_records_steps(self, project_dir):
        result = runner.invoke(
            app, ["init", "--verbose", "--log-file", "run.log"], input=LOCAL_EXPRESS_POSTGRES
        )

        assert result.exit_code == 0, result.stdout
        reset_file_logging()
        log = (project_dir / "run.log").read_text()
        assert "Running step dockerfile" in log
        assert "Saved progress at step docker-compose" in log
        assert "Wrote " in log


class TestInitResume:

    def _checkpoint(self, project_dir, step, **extra):
        answers = {
            "projectName": "shop-api",
            "projectType": "express",
            "useDefaultPort": True,
            "port": "3000",
            "database": "postgres",
            "deploymentTarget": "local",
            "needsDatabase": True,
        }
        answers.update(extra)
        ProgressStore().save(answers, step, project_dir)

    def test_resume_skips_questions(self, project_dir):
        self._checkpoint(project_dir, InitStep.DOCKER_COMPOSE)

        result = runner.invoke(app, ["init"], input="y\n")

        assert result.exit_code == 0, result.stdout
        assert "Resuming at step: docker-compose" in result.stdout
        assert "Project name" not in result.stdout
        assert not (project_dir / "Dockerfile").exists()
        assert (project_dir / "docker-compose.yml").exists()
        assert (project_dir / "README.md").exists()
        assert ProgressStore().exists() is False

    def test_resume_asks_only_target_questions(self, project_dir):
        self._checkpoint(project_dir, InitStep.ADDITIONAL_QUESTIONS, deploymentTarget="cloud", needsDomain=False)

        result = runner.invoke(app, ["init"], input="y\nhetzner\n")

        assert result.exit_code == 0, result.stdout
        assert "Project name" not in result.stdout
        assert 'case "hetzner" in' in (project_dir / "scripts" / "deploy-cloud.sh").read_text()

    def test_declining_resume_starts_fresh(self, project_dir):
        self._checkpoint(project_dir, InitStep.README, projectName="old-project")

        result = runner.invoke(app, ["init"], input="n\n" + LOCAL_EXPRESS_POSTGRES)

        assert result.exit_code == 0, result.stdout
        assert (project_dir / "Dockerfile").exists()
        assert "# shop-api" in (project_dir / "README.md").read_text()

    def test_unreadable_checkpoint_starts_fresh(self, project_dir):
        store = ProgressStore()
        store.progress_file.parent.mkdir(parents=True, exist_ok=True)
        store.progress_file.write_text("{broken")

        result = runner.invoke(app, ["init"], input=LOCAL_EXPRESS_POSTGRES)

        assert result.exit_code == 0, result.stdout
        assert "unreadable" in result.stdout
        assert (project_dir / "Dockerfile").exists()


class TestProgressCommands:

    def test_show_without_progress(self):
        result = runner.invoke(app, ["progress", "show"])

        assert result.exit_code == 0
        assert "No saved progress" in result.stdout

    def test_show_and_clear(self, tmp_path):
        store = ProgressStore()
        store.save({"projectName": "demo"}, InitStep.ENV_FILE, tmp_path)

        shown = runner.invoke(app, ["progress", "show"])
        assert shown.exit_code == 0
        assert "demo" in shown.stdout
        assert "env-file" in shown.stdout

        cleared = runner.invoke(app, ["progress", "clear"])
        assert cleared.exit_code == 0
        assert store.exists() is False

    def test_saved_document_shape(self, tmp_path):
        ProgressStore().save({"projectName": "demo"}, InitStep.README, tmp_path)
        document = json.loads(ProgressStore().progress_file.read_text())
        assert document["currentStep"] == "readme"
