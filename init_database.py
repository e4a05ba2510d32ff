# Create all tables in the configured database
from lexchain.config import config, configure_logging
from lexchain.models.db import init_database

configure_logging()
engine = init_database(config.database_url)
print(f'Tables created in {engine.url.render_as_string(hide_password=True)}')
