"""
Lambda Handler for the Ali Farm API
Runs the FastAPI app on AWS Lambda through Mangum
"""
import os
import sys
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Lambda does not always put the bundle root on sys.path
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from mangum import Mangum
from alifarm.core.config import settings
from alifarm.main import app

handler_mangum = Mangum(app, lifespan="off")


def strip_base_path(event, base_path):
    """Remove the API Gateway stage prefix from every path field of the event"""
    original_path = event.get('rawPath') or event.get('path') or event.get('requestContext', {}).get('http', {}).get('path', '')
    if not base_path or not original_path.startswith(base_path):
        return event

    new_path = original_path[len(base_path):] or "/"
    if 'rawPath' in event:
        event['rawPath'] = new_path
    if 'path' in event:
        event['path'] = new_path
    if 'requestContext' in event and 'http' in event['requestContext']:
        event['requestContext']['http']['path'] = new_path
    logger.info(f"Path rewritten: {original_path} -> {new_path}")
    return event


def handler(event, context):
    event = strip_base_path(event, settings.LAMBDA_BASE_PATH)
    try:
        response = handler_mangum(event, context)
        logger.info(f"Response status: {response.get('statusCode', 'N/A')}")
        return response
    except Exception as e:
        logger.error(f"Error in handler: {str(e)}", exc_info=True)
        raise
