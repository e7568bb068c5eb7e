"""
elastic-schema configuration

We read configuration from 2 sources, in order of precedence (higher is more priority)
- Environment variables
- A .env file, either in the current working directory or in a location specified
  by the ELASTIC_SCHEMA_ENV_FILE environment variable
"""

import functools
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from class_doc import extract_docs_from_cls_obj
from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "elastic_schema_"


class StringType(str, Enum):
    #: exact values, usable in terms aggregations and term queries
    keyword = "keyword"

    #: analyzed full text, usable in match queries
    text = "text"


for field, doc in extract_docs_from_cls_obj(StringType).items():
    StringType[field].__doc__ = "\n".join(doc)


class Settings(BaseSettings):
    env_file: Annotated[
        Path,
        Field(
            description="Location of a .env file (if used) relative to working directory",
        ),
    ] = Path(".env")

    mapping_inference: Annotated[
        bool,
        Field(
            description="Default for fields that do not say whether their type may be inferred from the target",
        ),
    ] = True

    string_type: Annotated[
        StringType,
        Field(description="Elastic type used when inferring the mapping of a str attribute"),
    ] = StringType.keyword

    date_format: Annotated[
        str,
        Field(description="Elastic date format used when inferring the mapping of a date attribute"),
    ] = "strict_date_optional_time"

    elastic_password: Annotated[
        str | None,
        Field(
            description=(
                "Elasticsearch password. This the password for the 'elastic' user when Elastic xpack security is enabled"
            )
        ),
    ] = None

    elastic_host: Annotated[
        str | None,
        Field(
            description=(
                "Elasticsearch host. "
                "Default: https://localhost:9200 if elastic_password is set, http://localhost:9200 otherwise"
            )
        ),
    ] = None

    elastic_verify_ssl: Annotated[
        bool | None,
        Field(
            description=(
                "Elasticsearch verify SSL (only used if elastic_password is set). Default: True unless host is localhost)"
            ),
        ),
    ] = None

    @model_validator(mode="after")
    def set_ssl(self: Any) -> "Settings":
        if not self.elastic_host:
            self.elastic_host = ("https" if self.elastic_password else "http") + "://localhost:9200"
        if self.elastic_verify_ssl is None:
            self.elastic_verify_ssl = self.elastic_host not in {
                "http://localhost:9200",
                "https://localhost:9200",
            }
        return self

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)


@functools.lru_cache()
def get_settings() -> Settings:
    temp = Settings()
    load_dotenv(temp.env_file, override=False)
    return Settings()


if __name__ == "__main__":
    # Echo the settings
    for k, v in get_settings().model_dump(mode="json").items():
        print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")
