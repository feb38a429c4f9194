from mangum import Mangum

from todo_api.main import app

# serverless entry point: the same API behind API Gateway / Lambda
handler = Mangum(app)
