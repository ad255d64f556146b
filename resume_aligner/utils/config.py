"""
Configuration loading for resume_aligner.

Built-in defaults are merged with an optional YAML override file. The override
path comes from the caller or the RESUME_ALIGNER_CONFIG environment variable.

Examples:
    >>> config = load_config()
    >>> config["llm"]["provider"]
    'gemini'

    # configs/local.yaml:
    #   llm:
    #     provider: openai
    #     model: gpt-4o-mini
    >>> config = load_config(Path("configs/local.yaml"))
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_CONFIG = {
    "llm": {
        "provider": "${oc.env:LLM_PROVIDER,gemini}",
        "model": "${oc.env:LLM_MODEL,null}",
        "max_tokens": 8192,
    },
    "analysis": {
        # Prompt size guards; resumes and job descriptions rarely come close
        "max_resume_chars": 20000,
        "max_job_description_chars": 20000,
    },
}


def load_config(config_path: Path = None) -> Dict[str, Any]:
    """
    Load configuration, merging an optional YAML file over the defaults.

    Args:
        config_path: Optional YAML override file (defaults to the
            RESUME_ALIGNER_CONFIG environment variable, if set)

    Returns:
        Fully resolved configuration as a plain dict

    Raises:
        FileNotFoundError: If an override path is given but does not exist
    """
    base = OmegaConf.create(DEFAULT_CONFIG)

    if config_path is None and os.getenv("RESUME_ALIGNER_CONFIG"):
        config_path = Path(os.getenv("RESUME_ALIGNER_CONFIG"))

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        base = OmegaConf.merge(base, OmegaConf.load(config_path))

    return OmegaConf.to_container(base, resolve=True)
