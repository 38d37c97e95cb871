"""Lambda handler for the Documents API using Mangum."""
from mangum import Mangum

from documents_api.main import create_app

app = create_app()

handler = Mangum(app, lifespan="off")
lambda_handler = handler
