"""
Prompt template manager for Parse & Practice.

Templates live in ``parse_practice/prompts/<name>.txt`` and use
``{{VARIABLE}}`` placeholders.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from parse_practice.core.exceptions import PromptTemplateError

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


class PromptManager:
    """
    Loads prompt templates from disk (cached) and fills in variables.

    Example:
        manager = PromptManager()
        prompt = manager.load_prompt("extract_questions", TEXT=text, QUESTION_LIMIT="Extract all questions you can find.")
    """

    def __init__(self, prompts_dir: Optional[Union[str, Path]] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else DEFAULT_PROMPTS_DIR
        self._cache: Dict[str, str] = {}

        if not self.prompts_dir.exists():
            logger.warning(f"Prompts directory not found: {self.prompts_dir}")

    def load_prompt(self, name: str, **kwargs: Any) -> str:
        template = self._load_template(name)
        return self._substitute_variables(template, kwargs)

    def _load_template(self, name: str) -> str:
        if name in self._cache:
            return self._cache[name]

        template_file = self.prompts_dir / f"{name}.txt"
        if not template_file.exists():
            raise PromptTemplateError(
                f"Prompt template not found: {template_file}. "
                f"Available templates: {self.list_templates()}"
            )

        try:
            template = template_file.read_text(encoding="utf-8")
        except OSError as e:
            raise PromptTemplateError(f"Error loading template {name}: {e}") from e

        self._cache[name] = template
        logger.debug(f"Loaded prompt template: {name}")
        return template

    def _substitute_variables(self, template: str, variables: Dict[str, Any]) -> str:
        # One pass over the template, so placeholders inside values stay literal
        unsubstituted = [name for name in PLACEHOLDER_RE.findall(template) if name not in variables]
        if unsubstituted:
            logger.warning(f"Unsubstituted variables in template: {unsubstituted}")

        return PLACEHOLDER_RE.sub(
            lambda match: str(variables.get(match.group(1), match.group(0))),
            template,
        )

    def list_templates(self) -> List[str]:
        if not self.prompts_dir.exists():
            return []
        return sorted(f.stem for f in self.prompts_dir.glob("*.txt"))


_prompt_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    """Get global PromptManager instance (singleton)."""
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
    return _prompt_manager
