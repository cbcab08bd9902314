import os

from dotenv import load_dotenv

from infrastructure.config.settings import settings

load_dotenv()

DOCKER_NETWORK_NAME = settings.DEFAULT_DOCKER_NETWORK_NAME
IMAGE_NAME = settings.IMAGE_NAME
all_env_vars = dict(os.environ.items())

JOB_VARIABLES = {
    "env": all_env_vars,
    "image_pull_policy": "Never",
    "stream_output": True,
    "auto_remove": True,
    "networks": [DOCKER_NETWORK_NAME] if DOCKER_NETWORK_NAME else [],
}
