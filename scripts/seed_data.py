import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import settings
from demo.sample_data import seed_demo
from services.backend import Backend
from utils.logging import configure_logging

if __name__ == '__main__':
    configure_logging(settings.log_level, settings.log_path)
    name = sys.argv[1] if len(sys.argv) > 1 else (settings.default_user or "Demo Researcher")
    backend = Backend()
    user = backend.auth.login(name)
    counts = seed_demo(backend, user['id'])
    print(f"Seeded demo notebook for {user['name']} into {settings.data_dir}: {counts}")
