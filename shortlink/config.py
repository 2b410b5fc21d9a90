"""Configuration management for the link shortener."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    store_backend: Literal["memory", "postgres", "dynamodb"] = Field(
        default="memory",
        description="Link store backend"
    )

    database_url: str = Field(
        default="postgresql://postgres@localhost:5432/shortlink",
        description="PostgreSQL connection URL (postgres backend)"
    )

    create_tables: bool = Field(
        default=False,
        description="Create the links table on startup"
    )

    dynamodb_table: str = Field(
        default="shortlinks",
        description="DynamoDB table name (dynamodb backend)"
    )

    dynamodb_region: Optional[str] = Field(
        default=None,
        description="AWS region for DynamoDB"
    )

    dynamodb_endpoint_url: Optional[str] = Field(
        default=None,
        description="DynamoDB endpoint override (e.g. DynamoDB Local)"
    )

    execution_id: str = Field(
        default="default",
        description="Partition key stamped on links created by this process (dynamodb backend)"
    )

    # Redis settings (optional)
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for caching"
    )

    cache_ttl_seconds: int = Field(
        default=3600,
        description="Cache TTL in seconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes"
    )

    cors_allow_origin: str = Field(
        default="*",
        description="Value of Access-Control-Allow-Origin"
    )

    # Link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=3,
        le=6,
        description="Length of generated short codes"
    )

    code_alphabet: Literal["base62", "extended"] = Field(
        default="base62",
        description="Alphabet for generated codes; keep fixed per deployment"
    )

    custom_code_min_length: int = Field(
        default=8,
        ge=8,
        description="Minimum length of caller-supplied codes"
    )

    max_collision_retries: int = Field(
        default=5,
        ge=1,
        description="Attempts at a fresh random code before giving up"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
