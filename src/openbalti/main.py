from openbalti.api.fastapi import create_app
from openbalti.app.core.logging import setup_logging

setup_logging()

app = create_app()
