import os
from pathlib import Path
from typing import Optional

import yaml

from prscribe_core.utils.filters import parse_patterns

DEFAULT_CONFIG: dict = {
    "model": "openai",
    "model_name": None,  # None = provider default
    "ignore_files": [],  # patterns never summarized (e.g. "lib/**", "*.lock")
    "include_files": [],  # when non-empty, only matching files are summarized
    "create_file_comments": True,
    "output_as_comment": True,  # False = write the PR rollup into the PR description
    "update_release": True,
    "release_images": False,  # illustrate release summaries (OpenAI only, billed per image)
    "max_commits": 20,
    "max_files": 20,
    "max_query_length": 20000,
    "server_url": "https://github.com",
    "api_url": None,  # None = public GitHub API
}

_LIST_KEYS = ("ignore_files", "include_files")
_BOOL_KEYS = ("create_file_comments", "output_as_comment", "update_release", "release_images")
_INT_KEYS = ("max_commits", "max_files", "max_query_length")

# GitHub Action inputs arrive as INPUT_<NAME> environment variables.
_ACTION_INPUTS = {
    "INPUT_IGNORE_FILES": "ignore_files",
    "INPUT_SRC_FILES": "include_files",
    "INPUT_CREATE_FILE_COMMENTS": "create_file_comments",
    "INPUT_OUTPUT_AS_COMMENT": "output_as_comment",
    "INPUT_UPDATE_RELEASE": "update_release",
    "INPUT_RELEASE_IMAGES": "release_images",
    "INPUT_MODEL": "model",
    "INPUT_MODEL_NAME": "model_name",
}


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _action_inputs() -> dict:
    inputs = {}
    for env_name, key in _ACTION_INPUTS.items():
        value = os.environ.get(env_name)
        if value is not None and value.strip() != "":
            inputs[key] = value.strip()
    return inputs


def _normalize(config: dict) -> dict:
    for key in _LIST_KEYS:
        config[key] = parse_patterns(config.get(key))
    for key in _BOOL_KEYS:
        config[key] = parse_bool(config.get(key))
    for key in _INT_KEYS:
        config[key] = int(config[key])
    return config


def load_config(config_path: str = ".prscribe.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prscribe.yml in the current directory
      3. GitHub Action inputs (INPUT_* environment variables)
      4. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "ignore_files": [], "include_files": []}

    server_url = os.environ.get("GITHUB_SERVER_URL")
    if server_url:
        config["server_url"] = server_url
    api_url = os.environ.get("GITHUB_API_URL")
    if api_url:
        config["api_url"] = api_url

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    config.update(_action_inputs())

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return _normalize(config)
