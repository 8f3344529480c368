"""Deployment script generation for VPS and cloud targets."""
from typing import Dict, NamedTuple

from kmuc_hoster.models.answers import DeploymentTarget, ProjectAnswers

EXECUTABLE = 0o755
REGULAR = 0o644


class GeneratedFile(NamedTuple):
    content: str
    mode: int = REGULAR


class DeploymentScriptGenerator:
    """Generates deployment automation scripts."""

    def generate_deploy_script(self, answers: ProjectAnswers) -> str:
        """VPS deploy script: ship a tarball over scp and restart compose remotely."""
        name = answers.project_name
        server_ip = answers.server_ip or "YOUR_SERVER_IP"
        server_user = answers.server_user or "root"
        server_port = answers.server_port or "22"
        app_dir = f"/opt/{name}"

        return f"""#!/bin/bash
# VPS deploy script for {name}

set -e

echo "🚀 Deploying {name} to VPS..."

SERVER_IP="{server_ip}"
SERVER_USER="{server_user}"
SERVER_PORT="{server_port}"
APP_DIR="{app_dir}"

GREEN='\\033[0;32m'
RED='\\033[0;31m'
NC='\\033[0m'

echo "📦 Creating deployment archive..."
tar -czf {name}.tar.gz \\
  --exclude='node_modules' \\
  --exclude='.git' \\
  --exclude='*.log' \\
  --exclude='.env' \\
  .

echo "📤 Uploading to server..."
scp -P ${{SERVER_PORT}} {name}.tar.gz ${{SERVER_USER}}@${{SERVER_IP}}:/tmp/

echo "🔧 Deploying on server..."
ssh -p ${{SERVER_PORT}} ${{SERVER_USER}}@${{SERVER_IP}} << 'ENDSSH'
  set -e

  mkdir -p {app_dir}

  if [ -d "{app_dir}/current" ]; then
    echo "💾 Creating backup..."
    cp -r {app_dir}/current {app_dir}/backup-$(date +%Y%m%d-%H%M%S)
  fi

  echo "📦 Unpacking new version..."
  mkdir -p {app_dir}/current
  tar -xzf /tmp/{name}.tar.gz -C {app_dir}/current

  cd {app_dir}/current

  if ! command -v docker &> /dev/null; then
    echo "🐳 Installing Docker..."
    curl -fsSL https://get.docker.com -o get-docker.sh
    sh get-docker.sh
    systemctl enable docker
    systemctl start docker
  fi

  if ! command -v docker-compose &> /dev/null; then
    echo "🐳 Installing Docker Compose..."
    curl -L "https://github.com/docker/compose/releases/latest/download/docker-compose-$(uname -s)-$(uname -m)" -o /usr/local/bin/docker-compose
    chmod +x /usr/local/bin/docker-compose
  fi

  if [ ! -f .env ]; then
    echo "⚠️  No .env file found, creating one from .env.example"
    cp .env.example .env
    echo "⚠️  Edit .env with real values!"
  fi

  echo "🐳 Starting containers..."
  docker-compose down || true
  docker-compose build
  docker-compose up -d

  rm /tmp/{name}.tar.gz

  echo "✅ Deployment finished!"
  docker-compose ps
ENDSSH

echo -e "${{GREEN}}✅ Deployment successful!${{NC}}"
echo ""
echo "📊 Logs: ssh -p ${{SERVER_PORT}} ${{SERVER_USER}}@${{SERVER_IP}} 'cd {app_dir}/current && docker-compose logs -f'"
"""

    def generate_cloud_script(self, answers: ProjectAnswers) -> str:
        name = answers.project_name
        provider = answers.cloud_provider or "generic"

        return f"""#!/bin/bash
# Cloud deploy script for {name} ({provider})

set -e

echo "☁️  Deploying to {provider}..."

PROJECT_NAME="{name}"
REGION="eu-central-1"  # adjust

case "{provider}" in
  "digitalocean")
    echo "🌊 DigitalOcean deployment"
    echo "💡 Tip: use doctl"
    echo "   doctl compute droplet create ..."
    ;;

  "hetzner")
    echo "🔷 Hetzner Cloud deployment"
    echo "💡 Tip: use the hcloud CLI"
    echo "   hcloud server create ..."
    ;;

  "aws")
    echo "☁️  AWS EC2 deployment"
    echo "💡 Tip: use the AWS CLI or CDK"
    ;;

  *)
    echo "📝 Generic cloud deployment"
    echo ""
    echo "Steps:"
    echo "1. Create a cloud server/VM"
    echo "2. Copy the project files to the server"
    echo "3. Run scripts/deploy.sh"
    ;;
esac
"""

    def generate_domain_setup_script(self, answers: ProjectAnswers) -> str:
        """Host-level nginx + certbot setup for the requested domain."""
        name = answers.project_name
        domain = answers.domain
        site_config = self._ssl_server_blocks(domain, f"localhost:{answers.port}")

        return f"""#!/bin/bash
# Domain & SSL setup script for {name}

set -e

echo "🌐 Setting up domain and SSL for {domain}..."

GREEN='\\033[0;32m'
RED='\\033[0;31m'
YELLOW='\\033[1;33m'
NC='\\033[0m'

if [ "$EUID" -ne 0 ]; then
  echo -e "${{RED}}❌ Please run as root (sudo)${{NC}}"
  exit 1
fi

DOMAIN="{domain}"
EMAIL="admin@${{DOMAIN}}"

if ! command -v nginx &> /dev/null; then
  echo "📦 Installing nginx..."
  apt-get update
  apt-get install -y nginx
  systemctl enable nginx
fi

if ! command -v certbot &> /dev/null; then
  echo "📦 Installing certbot..."
  apt-get install -y certbot python3-certbot-nginx
fi

echo "📝 Writing nginx site config..."
cat > /etc/nginx/sites-available/{name} << 'NGINX_EOF'
{site_config}NGINX_EOF

ln -sf /etc/nginx/sites-available/{name} /etc/nginx/sites-enabled/

nginx -t

mkdir -p /var/www/certbot

echo -e "${{YELLOW}}📜 Requesting SSL certificate...${{NC}}"
echo "⚠️  Make sure the domain points at this server!"
read -p "Continue? (y/n) " -n 1 -r
echo
if [[ ! $REPLY =~ ^[Yy]$ ]]; then
  echo "Aborted."
  exit 1
fi

certbot certonly --nginx \\
  -d ${{DOMAIN}} \\
  -d www.${{DOMAIN}} \\
  --email ${{EMAIL}} \\
  --agree-tos \\
  --no-eff-email

systemctl enable certbot.timer
systemctl start certbot.timer

systemctl reload nginx

echo -e "${{GREEN}}✅ Domain setup complete!${{NC}}"
echo "🌐 https://${{DOMAIN}}"
"""

    def generate_nginx_config(self, answers: ProjectAnswers) -> str:
        """nginx.conf for the compose nginx service, proxying to the app container."""
        upstream = f"app:{answers.port}"
        if not answers.ssl_enabled:
            return f"""server {{
    listen 80;
    server_name {answers.domain or '_'};

{self._proxy_location(upstream)}}}
"""
        return self._ssl_server_blocks(answers.domain, upstream)

    def generate_docker_helpers(self, answers: ProjectAnswers) -> str:
        return f"""#!/bin/bash
# Docker helper commands for {answers.project_name}

GREEN='\\033[0;32m'
YELLOW='\\033[1;33m'
NC='\\033[0m'

show_logs() {{
    echo -e "${{YELLOW}}📊 Container logs:${{NC}}"
    docker-compose logs -f --tail=100
}}

show_status() {{
    echo -e "${{YELLOW}}📊 Container status:${{NC}}"
    docker-compose ps
}}

restart_app() {{
    echo -e "${{YELLOW}}♻️  Restarting containers...${{NC}}"
    docker-compose restart
    echo -e "${{GREEN}}✅ Restarted${{NC}}"
}}

rebuild_app() {{
    echo -e "${{YELLOW}}🔨 Rebuilding containers...${{NC}}"
    docker-compose down
    docker-compose build --no-cache
    docker-compose up -d
    echo -e "${{GREEN}}✅ Rebuilt${{NC}}"
}}

cleanup() {{
    echo -e "${{YELLOW}}🧹 Pruning Docker resources...${{NC}}"
    docker system prune -f
    echo -e "${{GREEN}}✅ Cleanup done${{NC}}"
}}

case "$1" in
    logs)
        show_logs
        ;;
    status)
        show_status
        ;;
    restart)
        restart_app
        ;;
    rebuild)
        rebuild_app
        ;;
    cleanup)
        cleanup
        ;;
    *)
        echo "Usage: $0 {{logs|status|restart|rebuild|cleanup}}"
        exit 1
        ;;
esac
"""

    @staticmethod
    def _proxy_location(upstream: str) -> str:
        return f"""    location / {{
        proxy_pass http://{upstream};
        proxy_http_version 1.1;
        proxy_set_header Upgrade $http_upgrade;
        proxy_set_header Connection 'upgrade';
        proxy_set_header Host $host;
        proxy_set_header X-Real-IP $remote_addr;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
        proxy_set_header X-Forwarded-Proto $scheme;
        proxy_cache_bypass $http_upgrade;
    }}
"""

    def _ssl_server_blocks(self, domain: str, upstream: str) -> str:
        return f"""server {{
    listen 80;
    server_name {domain} www.{domain};

    location /.well-known/acme-challenge/ {{
        root /var/www/certbot;
    }}

    location / {{
        return 301 https://$host$request_uri;
    }}
}}

server {{
    listen 443 ssl http2;
    server_name {domain} www.{domain};

    ssl_certificate /etc/letsencrypt/live/{domain}/fullchain.pem;
    ssl_certificate_key /etc/letsencrypt/live/{domain}/privkey.pem;

    ssl_protocols TLSv1.2 TLSv1.3;
    ssl_ciphers HIGH:!aNULL:!MD5;
    ssl_prefer_server_ciphers on;

    add_header Strict-Transport-Security "max-age=31536000; includeSubDomains" always;
    add_header X-Frame-Options "SAMEORIGIN" always;
    add_header X-Content-Type-Options "nosniff" always;

{self._proxy_location(upstream)}}}
"""


def render_deploy_files(answers: ProjectAnswers) -> Dict[str, GeneratedFile]:
    """Files written by the deploy-scripts step, keyed by project-relative path.

    Empty for local-only projects.
    """
    if not answers.deploys_remotely:
        return {}

    generator = DeploymentScriptGenerator()
    files: Dict[str, GeneratedFile] = {}

    if answers.deployment_target == DeploymentTarget.VPS.value:
        files["scripts/deploy.sh"] = GeneratedFile(generator.generate_deploy_script(answers), EXECUTABLE)

    if answers.reverse_proxied and answers.ssl_enabled:
        files["scripts/setup-domain.sh"] = GeneratedFile(
            generator.generate_domain_setup_script(answers), EXECUTABLE
        )
    if answers.reverse_proxied:
        files["nginx.conf"] = GeneratedFile(generator.generate_nginx_config(answers))

    if answers.deployment_target == DeploymentTarget.CLOUD.value:
        files["scripts/deploy-cloud.sh"] = GeneratedFile(generator.generate_cloud_script(answers), EXECUTABLE)

    files["scripts/docker-helpers.sh"] = GeneratedFile(generator.generate_docker_helpers(answers), EXECUTABLE)
    return files
