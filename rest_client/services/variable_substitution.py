"""
Variable substitution service for replacing {{variable}} placeholders.

This service handles substitution of placeholders in request drafts (URL,
header keys, header values, body) using an environment's variables.
"""

import logging
import re
from typing import List

from ..schemas.request import RequestDraft

logger = logging.getLogger(__name__)

# Pattern to match {{variable_name}} placeholders
VARIABLE_PATTERN = re.compile(r'\{\{(\w+)\}\}')


def extract_variables(template: str | None) -> List[str]:
    """
    Extract all variable names from a template string.

    Args:
        template: String containing {{variable}} placeholders

    Returns:
        List of variable names found in the template

    Example:
        >>> extract_variables("Hello {{name}}, your id is {{id}}")
        ['name', 'id']
    """
    if not template:
        return []

    return VARIABLE_PATTERN.findall(template)


def substitute(template: str, variables: dict[str, str]) -> str:
    """
    Replace variable placeholders in a template with their values.

    Keys are matched literally, and tried in the mapping's iteration order
    at each position. The template is scanned once: text inserted by a
    replacement is never scanned again, so a value containing ``{{other}}``
    stays as written. Placeholders without a matching key are left untouched.

    Args:
        template: String containing {{variable}} placeholders
        variables: Dictionary mapping variable names to their values

    Returns:
        The substituted string

    Example:
        >>> substitute("{{a}}-{{b}}", {"a": "1", "b": "2"})
        '1-2'
        >>> substitute("Hello {{name}}", {})
        'Hello {{name}}'
        >>> substitute("{{x}}", {"x": "{{y}}", "y": "z"})
        '{{y}}'
    """
    if not template or not variables:
        return template

    pattern = re.compile(
        r"\{\{(" + "|".join(re.escape(key) for key in variables) + r")\}\}"
    )
    return pattern.sub(lambda match: variables[match.group(1)], template)


def substitute_draft(draft: RequestDraft, variables: dict[str, str]) -> RequestDraft:
    """
    Apply variable substitution to the URL, body and every header key and value.

    Args:
        draft: The draft to process
        variables: Variable name to value mapping

    Returns:
        A new draft with substituted values
    """
    if not variables:
        return draft

    headers = {
        substitute(key, variables): substitute(value, variables)
        for key, value in draft.headers.items()
    }
    processed = draft.model_copy(update={
        "url": substitute(draft.url, variables),
        "headers": headers,
        "body": substitute(draft.body, variables) if draft.body else draft.body,
    })

    unresolved = extract_variables(processed.url) + extract_variables(processed.body)
    for key, value in processed.headers.items():
        unresolved.extend(extract_variables(key) + extract_variables(value))
    if unresolved:
        logger.debug("Unresolved placeholders left in request: %s", sorted(set(unresolved)))

    return processed
