"""Dockerfile templates per project type."""
from kmuc_hoster.models.answers import ProjectAnswers, ProjectType


def generate_dockerfile(answers: ProjectAnswers) -> str:
    """Render the Dockerfile for the selected project type."""
    port = answers.port
    renderers = {
        ProjectType.EXPRESS.value: _express,
        ProjectType.NEXTJS.value: _nextjs,
        ProjectType.REACT_VITE.value: _react_vite,
        ProjectType.NODE_BASIC.value: _node_basic,
        ProjectType.STATIC.value: _static,
    }
    return renderers.get(answers.project_type, _node_basic)(port)


def _express(port: str) -> str:
    return f"""# Node.js Express Dockerfile
FROM node:20-alpine AS base

# Native module build dependencies
RUN apk add --no-cache libc6-compat

WORKDIR /app

COPY package*.json ./
RUN npm ci --only=production

COPY . .

# Run as non-root
RUN addgroup --system --gid 1001 nodejs
RUN adduser --system --uid 1001 expressjs
RUN chown -R expressjs:nodejs /app

USER expressjs

EXPOSE {port}

HEALTHCHECK --interval=30s --timeout=3s --start-period=40s \\
  CMD node -e "require('http').get('http://localhost:{port}/health', (r) => {{process.exit(r.statusCode === 200 ? 0 : 1)}})"

CMD ["node", "server.js"]
"""


def _nextjs(port: str) -> str:
    return f"""# Next.js Dockerfile - multi-stage build
FROM node:20-alpine AS base

FROM base AS deps
RUN apk add --no-cache libc6-compat
WORKDIR /app

COPY package*.json ./
RUN npm ci

FROM base AS builder
WORKDIR /app
COPY --from=deps /app/node_modules ./node_modules
COPY . .

ENV NEXT_TELEMETRY_DISABLED 1

RUN npm run build

FROM base AS runner
WORKDIR /app

ENV NODE_ENV production
ENV NEXT_TELEMETRY_DISABLED 1

RUN addgroup --system --gid 1001 nodejs
RUN adduser --system --uid 1001 nextjs

COPY --from=builder /app/public ./public
COPY --from=builder --chown=nextjs:nodejs /app/.next/standalone ./
COPY --from=builder --chown=nextjs:nodejs /app/.next/static ./.next/static

USER nextjs

EXPOSE {port}

ENV PORT {port}
ENV HOSTNAME "0.0.0.0"

CMD ["node", "server.js"]
"""


def _react_vite(port: str) -> str:
    # nginx listens on 80 inside the container regardless of the chosen port
    return """# React Vite Dockerfile - multi-stage build
FROM node:20-alpine AS builder

WORKDIR /app

COPY package*.json ./
RUN npm ci

COPY . .
RUN npm run build

FROM nginx:alpine

COPY --from=builder /app/dist /usr/share/nginx/html

RUN echo 'server { \\
    listen 80; \\
    location / { \\
        root /usr/share/nginx/html; \\
        index index.html index.htm; \\
        try_files \\$uri \\$uri/ /index.html; \\
    } \\
}' > /etc/nginx/conf.d/default.conf

EXPOSE 80

CMD ["nginx", "-g", "daemon off;"]
"""


def _node_basic(port: str) -> str:
    return f"""# Node.js basic Dockerfile
FROM node:20-alpine

WORKDIR /app

COPY package*.json ./
RUN npm ci --only=production

COPY . .

RUN addgroup --system --gid 1001 nodejs
RUN adduser --system --uid 1001 nodeapp
RUN chown -R nodeapp:nodejs /app

USER nodeapp

EXPOSE {port}

CMD ["node", "index.js"]
"""


def _static(port: str) -> str:
    return """# Static website Dockerfile
FROM nginx:alpine

COPY . /usr/share/nginx/html

RUN echo 'server {' > /etc/nginx/conf.d/default.conf && \\
    echo '    listen 80;' >> /etc/nginx/conf.d/default.conf && \\
    echo '    location / {' >> /etc/nginx/conf.d/default.conf && \\
    echo '        root /usr/share/nginx/html;' >> /etc/nginx/conf.d/default.conf && \\
    echo '        index index.html index.htm;' >> /etc/nginx/conf.d/default.conf && \\
    echo '        try_files $uri $uri/ /index.html;' >> /etc/nginx/conf.d/default.conf && \\
    echo '    }' >> /etc/nginx/conf.d/default.conf && \\
    echo '}' >> /etc/nginx/conf.d/default.conf

EXPOSE 80

CMD ["nginx", "-g", "daemon off;"]
"""
