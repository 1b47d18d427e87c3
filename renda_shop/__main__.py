from . import create_app
from .models import create_tables

app = create_app()
with app.app_context():
    create_tables()
app.run(port=app.config["PORT"])
