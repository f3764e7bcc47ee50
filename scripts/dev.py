#!/usr/bin/env python3
import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = ROOT / 'backend'


def build_command(host: str, port: int, reload: bool) -> list[str]:
    command = [
        sys.executable,
        '-m',
        'uvicorn',
        'turmas.main:app',
        '--host',
        host,
        '--port',
        str(port),
    ]
    if reload:
        command.append('--reload')
    return command


def main() -> int:
    parser = argparse.ArgumentParser(description='Run the turmas API locally.')
    parser.add_argument('--host', default='0.0.0.0')
    parser.add_argument('--port', type=int, default=8001)
    parser.add_argument('--no-reload', action='store_true', help='Disable auto-reload.')
    parser.add_argument('--migrate', action='store_true', help='Apply alembic migrations before starting.')
    args = parser.parse_args()

    if not os.environ.get('DATABASE_URL'):
        raise SystemExit('DATABASE_URL is required.')

    if args.migrate:
        subprocess.run([sys.executable, '-m', 'alembic', 'upgrade', 'head'], cwd=str(BACKEND_DIR), check=True)

    process = subprocess.Popen(build_command(args.host, args.port, not args.no_reload), cwd=str(BACKEND_DIR))
    try:
        return process.wait()
    except KeyboardInterrupt:
        process.terminate()
        return process.wait()


if __name__ == '__main__':
    raise SystemExit(main())
