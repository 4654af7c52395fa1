"""Application settings loaded via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values come from THREE sources (highest priority first):
#
#   1. **Environment variables** - e.g. NLP_APP_ID=abc123
#   2. **.env file** - key=value lines in the project root .env file
#   3. **config/config.yaml** - passed in by load_settings() as init values
#
# Field `store_dsn` maps to env var `STORE_DSN` (pydantic-settings
# uppercases and matches).
#
# Fields without a default are REQUIRED.  If any is missing the whole
# load fails and the process refuses to start; see loader.py.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import PurePath
from string import Formatter

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_DEFAULT_NLP_ENDPOINT = "https://jlp.yahooapis.jp/KeyphraseService/V1/extract"


def _template_fields(template: str) -> set[str]:
    """Return the named ``{field}`` replacement fields in a format string."""
    return {name for _, name, _, _ in Formatter().parse(template) if name is not None}


class Settings(BaseSettings):
    """eventlens settings.

    Read once at startup and passed explicitly to every component; nothing
    mutates it afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === Relational store ===
    store_dsn: str
    # SELECT returning the EventRecord columns; {placeholders} becomes ?,?,...
    hydrate_sql: str
    # SELECT name, venue_name, description, subtitle ... WHERE id = ?
    text_fields_sql: str

    # === Search backend ===
    search_keyword_url: str  # must contain {offset} and {keyword}
    search_similar_url: str
    search_index: str = "event2"
    search_doc_type: str = "default"
    page_size: int = Field(default=20, ge=1)
    # Response navigation: payload[outer][inner] -> rows; row[value] -> id
    result_outer_key: str = "hits"
    result_inner_key: str = "hits"
    result_value_key: str = "_id"
    restore_rank_order: bool = False

    # === Keyphrase extraction ===
    nlp_app_id: str
    nlp_endpoint: str = _DEFAULT_NLP_ENDPOINT

    # === Outbound HTTP ===
    http_timeout: float = Field(default=30.0, gt=0)

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init values carry the YAML file, so they rank below the environment.
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("search_keyword_url")
    @classmethod
    def _check_keyword_url(cls, value: str) -> str:
        if _template_fields(value) != {"offset", "keyword"}:
            msg = "search_keyword_url must contain exactly the {offset} and {keyword} fields"
            raise ValueError(msg)
        return value

    @field_validator("hydrate_sql")
    @classmethod
    def _check_hydrate_sql(cls, value: str) -> str:
        if _template_fields(value) != {"placeholders"}:
            msg = "hydrate_sql must contain exactly one {placeholders} field"
            raise ValueError(msg)
        return value

    @field_validator(
        "store_dsn", "text_fields_sql", "search_similar_url", "nlp_app_id",
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return value

    def describe_collaborators(self) -> dict[str, str]:
        """Return non-secret endpoint info for the health endpoint.

        Only the database file name is exposed, never its full path.
        """
        return {
            "store": PurePath(self.store_dsn).name,
            "search_keyword": self.search_keyword_url.split("?", 1)[0],
            "search_similar": self.search_similar_url,
            "keyphrase": self.nlp_endpoint,
        }
