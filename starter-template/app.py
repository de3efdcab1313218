"""
Newsdesk Starter
================

Run with:
    python app.py

Visit:
    http://localhost:5000/health  - Health check
    http://localhost:5000/news    - Public news list
"""

from newsdesk import create_app
from newsdesk.core.config import Config

# Create Flask app - settings come from the environment / .env
app = create_app()


if __name__ == '__main__':
    prefix = app.config.get('API_PREFIX', '')
    print("\n" + "=" * 60)
    print("Newsdesk")
    print("=" * 60)
    print(f"Health:      http://localhost:{Config.port}{prefix}/health")
    print(f"News:        http://localhost:{Config.port}{prefix}/news")
    print(f"Login:       POST http://localhost:{Config.port}{prefix}/login")
    print(f"Errors:      http://localhost:{Config.port}{prefix}/ops/errors (Bearer token)")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
