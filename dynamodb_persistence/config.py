import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    # AWS / DynamoDB client
    AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")
    # Point at DynamoDB Local or LocalStack during development
    DYNAMODB_ENDPOINT_URL: str = os.getenv("DYNAMODB_ENDPOINT_URL", "")

    # Client-side retry/timeout policy (handled by botocore, never by the adapter)
    DYNAMODB_MAX_ATTEMPTS: int = int(os.getenv("DYNAMODB_MAX_ATTEMPTS", "3"))
    DYNAMODB_CONNECT_TIMEOUT: float = float(os.getenv("DYNAMODB_CONNECT_TIMEOUT", "5"))  # seconds
    DYNAMODB_READ_TIMEOUT: float = float(os.getenv("DYNAMODB_READ_TIMEOUT", "10"))  # seconds

    # Persistence table
    PERSISTENCE_TABLE_NAME: str = os.getenv("PERSISTENCE_TABLE_NAME", "")
    PERSISTENCE_AUTO_CREATE_TABLE: bool = (
        os.getenv("PERSISTENCE_AUTO_CREATE_TABLE", "false").lower() == "true"
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def has_custom_endpoint(cls) -> bool:
        """Check if a non-AWS DynamoDB endpoint is configured."""
        return bool(cls.DYNAMODB_ENDPOINT_URL)

    @classmethod
    def validate(cls, require_table_name: bool = True) -> list[str]:
        """Validate configuration. Returns list of errors with clear guidance.

        Args:
            require_table_name: Set to False when the caller supplies the
                table name some other way (e.g. a command line flag).
        """
        errors: list[str] = []

        if require_table_name and not cls.PERSISTENCE_TABLE_NAME:
            errors.append(
                "PERSISTENCE_TABLE_NAME is required. "
                "Set it to the DynamoDB table holding skill attributes in .env"
            )

        if not cls.AWS_REGION:
            errors.append("AWS_REGION must not be empty (e.g. us-east-1)")

        if cls.DYNAMODB_MAX_ATTEMPTS < 1:
            errors.append(
                f"DYNAMODB_MAX_ATTEMPTS must be at least 1, got {cls.DYNAMODB_MAX_ATTEMPTS}"
            )

        if cls.DYNAMODB_CONNECT_TIMEOUT <= 0:
            errors.append(
                f"DYNAMODB_CONNECT_TIMEOUT must be positive, got {cls.DYNAMODB_CONNECT_TIMEOUT}"
            )

        if cls.DYNAMODB_READ_TIMEOUT <= 0:
            errors.append(
                f"DYNAMODB_READ_TIMEOUT must be positive, got {cls.DYNAMODB_READ_TIMEOUT}"
            )

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if cls.LOG_LEVEL not in valid_log_levels:
            errors.append(
                f"LOG_LEVEL '{cls.LOG_LEVEL}' is not valid. "
                f"Valid levels: {', '.join(sorted(valid_log_levels))}"
            )

        return errors
