"""docker-compose.yml rendering.

The compose document is assembled as a dict and dumped with PyYAML, keeping
insertion order so output is stable across runs.
"""
from typing import Any, Dict, List

import yaml

from kmuc_hoster.models.answers import Database, ProjectAnswers, ProjectType

NETWORK = "app-network"

# Variables passed through from .env to the app container, per database
DATABASE_APP_ENV: Dict[str, List[str]] = {
    Database.POSTGRES.value: ["POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB", "DATABASE_URL"],
    Database.MONGODB.value: ["MONGODB_URI"],
    Database.REDIS.value: ["REDIS_URL"],
    Database.MYSQL.value: ["DATABASE_URL"],
}


def _env_refs(names: List[str]) -> List[str]:
    return [f"{name}=${{{name}}}" for name in names]


def _healthcheck(test: Any) -> Dict[str, Any]:
    return {"test": test, "interval": "10s", "timeout": "5s", "retries": 5}


def database_service(database: str, project_name: str) -> Dict[str, Any]:
    """Compose service definition for the selected database engine."""
    base = {"container_name": f"{project_name}-{database}", "restart": "unless-stopped"}

    if database == Database.POSTGRES.value:
        return {
            "image": "postgres:16-alpine",
            **base,
            "environment": _env_refs(["POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB"]),
            "volumes": ["postgres-data:/var/lib/postgresql/data"],
            "networks": [NETWORK],
            "healthcheck": _healthcheck(["CMD-SHELL", "pg_isready -U ${POSTGRES_USER}"]),
        }
    if database == Database.MONGODB.value:
        return {
            "image": "mongo:7-jammy",
            **base,
            "environment": _env_refs(["MONGO_INITDB_ROOT_USERNAME", "MONGO_INITDB_ROOT_PASSWORD"]),
            "volumes": ["mongodb-data:/data/db"],
            "networks": [NETWORK],
            "healthcheck": _healthcheck(
                "echo 'db.runCommand(\"ping\").ok' | mongosh localhost:27017/test --quiet"
            ),
        }
    if database == Database.REDIS.value:
        return {
            "image": "redis:7-alpine",
            **base,
            "volumes": ["redis-data:/data"],
            "networks": [NETWORK],
            "healthcheck": _healthcheck(["CMD", "redis-cli", "ping"]),
        }
    if database == Database.MYSQL.value:
        return {
            "image": "mysql:8",
            **base,
            "environment": _env_refs(
                ["MYSQL_ROOT_PASSWORD", "MYSQL_DATABASE", "MYSQL_USER", "MYSQL_PASSWORD"]
            ),
            "volumes": ["mysql-data:/var/lib/mysql"],
            "networks": [NETWORK],
            "healthcheck": _healthcheck(["CMD", "mysqladmin", "ping", "-h", "localhost"]),
        }
    return {}


def _app_service(answers: ProjectAnswers) -> Dict[str, Any]:
    port = answers.port
    service: Dict[str, Any] = {
        "build": ".",
        "container_name": f"{answers.project_name}-app",
        "restart": "unless-stopped",
    }

    if answers.reverse_proxied:
        service["expose"] = [port]
    else:
        service["ports"] = [f"{port}:{port}"]

    environment = ["NODE_ENV=production", f"PORT={port}"]
    if answers.needs_database:
        environment += _env_refs(DATABASE_APP_ENV.get(answers.database, []))
    service["environment"] = environment

    if answers.needs_database:
        service["depends_on"] = [answers.database]

    if answers.project_type != ProjectType.STATIC.value:
        service["volumes"] = ["./:/app", "/app/node_modules"]

    service["networks"] = [NETWORK]
    return service


def _proxy_services(answers: ProjectAnswers) -> Dict[str, Any]:
    name = answers.project_name
    ssl = answers.ssl_enabled and bool(answers.domain)

    nginx: Dict[str, Any] = {
        "image": "nginx:alpine",
        "container_name": f"{name}-nginx",
        "restart": "unless-stopped",
        "ports": ["80:80", "443:443"] if answers.ssl_enabled else ["80:80"],
        "volumes": ["./nginx.conf:/etc/nginx/conf.d/default.conf:ro"],
        "depends_on": ["app"],
        "networks": [NETWORK],
    }
    if ssl:
        nginx["volumes"] += [
            "./certbot/conf:/etc/letsencrypt:ro",
            "./certbot/www:/var/www/certbot:ro",
        ]

    services = {"nginx": nginx}
    if ssl:
        services["certbot"] = {
            "image": "certbot/certbot",
            "container_name": f"{name}-certbot",
            "volumes": ["./certbot/conf:/etc/letsencrypt", "./certbot/www:/var/www/certbot"],
            "entrypoint": (
                "/bin/sh -c 'trap exit TERM; while :; do certbot renew; "
                "sleep 12h & wait $${!}; done;'"
            ),
        }
    return services


def build_compose(answers: ProjectAnswers) -> Dict[str, Any]:
    """Compose document as a plain dict (no top-level version key)."""
    services: Dict[str, Any] = {"app": _app_service(answers)}

    if answers.needs_database:
        services[answers.database] = database_service(answers.database, answers.project_name)

    if answers.reverse_proxied:
        services.update(_proxy_services(answers))

    compose: Dict[str, Any] = {
        "services": services,
        "networks": {NETWORK: {"driver": "bridge"}},
    }
    if answers.needs_database:
        compose["volumes"] = {f"{answers.database}-data": {"driver": "local"}}
    return compose


def generate_docker_compose(answers: ProjectAnswers) -> str:
    return yaml.dump(build_compose(answers), default_flow_style=False, sort_keys=False)
