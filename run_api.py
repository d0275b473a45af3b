"""
API Server Runner

Entry point for running the mail intelligence API with uvicorn. Loads
.env before the application reads its settings, so analysis thresholds
and department baselines can be set per deployment.
"""

import argparse
import logging
import os
import sys
import traceback

import uvicorn
from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("api_runner")


def parse_arguments(argv=None):
    """Parse command line arguments for the API server."""
    parser = argparse.ArgumentParser(description="Run the Mail Intelligence API server")

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind the server to (default: 8000)"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    parser.add_argument(
        "--env",
        type=str,
        choices=["development", "testing", "production"],
        default="development",
        help="Environment to run in (default: development)"
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Path to an environment file to load (default: .env)"
    )

    return parser.parse_args(argv)


def setup_environment(env: str, env_file: str) -> None:
    """
    Load the environment file and apply runtime mode variables.

    Values already present in the process environment take precedence
    over the file; ENVIRONMENT and DEBUG always follow the --env option.

    Args:
        env: Environment name (development, testing, production)
        env_file: Path to a dotenv file; missing files are skipped
    """
    if os.path.exists(env_file):
        load_dotenv(env_file, override=False)
        logger.info(f"Loaded environment from {env_file}")
    else:
        logger.info(f"No environment file at {env_file}, using process environment")

    os.environ["ENVIRONMENT"] = env
    os.environ["DEBUG"] = "false" if env == "production" else "true"


def main(argv=None):
    """Run the API server."""
    args = parse_arguments(argv)
    setup_environment(args.env, args.env_file)

    logger.info(f"Starting API server in {args.env} mode")
    logger.info(f"Server will be available at http://{args.host}:{args.port}")

    if args.env != "production":
        logger.info(f"API documentation will be available at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info" if args.env == "production" else "debug"
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error running server: {str(e)}")
        logger.error(traceback.format_exc())
        sys.exit(1)
