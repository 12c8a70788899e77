"""Decide whether an event should start an assistant run."""

from __future__ import annotations

import logging
import re

from claude_action.models.domain import EventName, GitHubContext

_logger = logging.getLogger(__name__)


def contains_trigger_phrase(text: str | None, phrase: str) -> bool:
    if not text or not phrase:
        return False
    pattern = re.compile(rf"(^|\s){re.escape(phrase)}([\s.,!?;:]|$)")
    return bool(pattern.search(text))


def check_trigger_action(context: GitHubContext) -> bool:
    inputs = context.inputs
    payload = context.payload
    action = context.event_action

    if inputs.direct_prompt:
        _logger.info("Direct prompt provided, triggering action")
        return True

    if context.event_name is EventName.ISSUES:
        issue = payload.get("issue") or {}
        if action == "assigned" and inputs.assignee_trigger:
            assignee = (payload.get("assignee") or {}).get("login", "")
            expected = inputs.assignee_trigger.lstrip("@")
            if assignee and assignee == expected:
                _logger.info("Issue assigned to trigger user '%s'", expected)
                return True
        if action == "labeled" and inputs.label_trigger:
            label = (payload.get("label") or {}).get("name", "")
            if label == inputs.label_trigger:
                _logger.info("Issue labeled with trigger label '%s'", label)
                return True
        if action in ("opened", "edited"):
            if contains_trigger_phrase(issue.get("body"), inputs.trigger_phrase):
                _logger.info("Issue body contains trigger phrase '%s'", inputs.trigger_phrase)
                return True
            if contains_trigger_phrase(issue.get("title"), inputs.trigger_phrase):
                _logger.info("Issue title contains trigger phrase '%s'", inputs.trigger_phrase)
                return True
        return False

    if context.event_name is EventName.PULL_REQUEST:
        pull = payload.get("pull_request") or {}
        if contains_trigger_phrase(pull.get("body"), inputs.trigger_phrase):
            _logger.info("Pull request body contains trigger phrase '%s'", inputs.trigger_phrase)
            return True
        if contains_trigger_phrase(pull.get("title"), inputs.trigger_phrase):
            _logger.info("Pull request title contains trigger phrase '%s'", inputs.trigger_phrase)
            return True
        return False

    if context.event_name is EventName.PULL_REQUEST_REVIEW:
        review = payload.get("review") or {}
        if action in ("submitted", "edited") and contains_trigger_phrase(review.get("body"), inputs.trigger_phrase):
            _logger.info("Review body contains trigger phrase '%s'", inputs.trigger_phrase)
            return True
        return False

    comment = payload.get("comment") or {}
    if contains_trigger_phrase(comment.get("body"), inputs.trigger_phrase):
        _logger.info("Comment contains trigger phrase '%s'", inputs.trigger_phrase)
        return True
    return False
