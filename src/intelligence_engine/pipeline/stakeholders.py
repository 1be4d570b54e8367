"""
Stakeholder mapping.

Classifies every meeting participant into one of five buckets using the
participant's explicit role. Participants without a recognized role land in
DEFAULT_BUCKET; nobody is dropped, including participants with neither
name nor email.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..logging import get_logger
from ..models.customer import CustomerData, Participant
from ..models.report import Stakeholder, StakeholderMap
from ..prompts.extract_insights import ExtractedStakeholder

logger = get_logger(__name__)

ROLE_BUCKETS: dict[str, str] = {
    'decision_maker': 'decision_makers',
    'champion': 'champions',
    'influencer': 'influencers',
    'end_user': 'end_users',
    'blocker': 'blockers',
}

DEFAULT_BUCKET = 'influencers'

# Title keyword -> department, checked in order
DEPARTMENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('Human Resources', ('people', 'hr', 'chro', 'talent', 'human resources')),
    ('Engineering', ('engineer', 'cto', 'developer', 'technical')),
    ('Information Technology', ('it ', 'cio', 'information', 'systems')),
    ('Finance', ('finance', 'cfo', 'controller', 'procurement')),
    ('Sales', ('sales', 'revenue', 'account')),
    ('Operations', ('operations', 'coo', 'ops')),
    ('Executive', ('ceo', 'founder', 'president')),
)


def normalize_role(role: str | None) -> str | None:
    """Normalize free-text roles ('Decision Maker', 'decision-maker') to a key."""
    if not role:
        return None
    key = role.strip().lower().replace('-', '_').replace(' ', '_')
    if key.endswith('s') and key[:-1] in ROLE_BUCKETS:
        key = key[:-1]
    return key or None


def classify_role(role: str | None) -> str:
    """Return the StakeholderMap bucket name for a participant role."""
    return ROLE_BUCKETS.get(normalize_role(role) or '', DEFAULT_BUCKET)


def infer_department(title: str) -> str | None:
    """Guess a department from a job title."""
    padded = f' {title.lower()} '
    for department, keywords in DEPARTMENT_KEYWORDS:
        if any(f' {k}' in padded for k in keywords):
            return department
    return None


UNKNOWN_PARTICIPANT = 'Unknown participant'


def _participant_key(participant: Participant, position: str) -> str:
    """Email, else name; anonymous participants are keyed by their position in the input."""
    key = (participant.email or participant.name).strip().lower()
    return key or position


def _engagement_level(meeting_count: int) -> str:
    if meeting_count >= 3:
        return 'high'
    if meeting_count == 2:
        return 'medium'
    return 'low'


def _collect_pain_points(
    extracted_stakeholders: Mapping[str, Sequence[Any]] | None,
) -> dict[str, list[str]]:
    """Pain points per lower-cased name from the model's stakeholder payload."""
    pain_points: dict[str, list[str]] = {}
    if not extracted_stakeholders:
        return pain_points

    for bucket, entries in extracted_stakeholders.items():
        if not isinstance(entries, Sequence) or isinstance(entries, str):
            continue
        for entry in entries:
            try:
                stakeholder = ExtractedStakeholder.model_validate(entry)
            except PydanticValidationError:
                logger.debug('stakeholders.invalid_entry_skipped', bucket=bucket)
                continue
            points = pain_points.setdefault(stakeholder.name.strip().lower(), [])
            points.extend(p for p in stakeholder.pain_points if p and p not in points)

    return pain_points


def map_stakeholders(
    customer_data: CustomerData,
    extracted_stakeholders: Mapping[str, Sequence[Any]] | None = None,
) -> StakeholderMap:
    """
    Build the stakeholder map for an account.

    Participants are de-duplicated by email (by name when email is blank);
    the first explicit role seen for a person wins.

    Args:
        customer_data: Normalized customer data
        extracted_stakeholders: Optional 'stakeholders' object from the
            completion payload, used only to attach pain points

    Returns:
        StakeholderMap with all five buckets present
    """
    people: dict[str, Participant] = {}
    meeting_counts: dict[str, int] = {}

    for meeting_index, meeting in enumerate(customer_data.meetings):
        seen_in_meeting: set[str] = set()
        for participant_index, participant in enumerate(meeting.participants):
            key = _participant_key(participant, f'#{meeting_index}:{participant_index}')
            existing = people.get(key)
            if existing is None or (not normalize_role(existing.role) and normalize_role(participant.role)):
                people[key] = participant
            if key not in seen_in_meeting:
                meeting_counts[key] = meeting_counts.get(key, 0) + 1
                seen_in_meeting.add(key)

    pain_points = _collect_pain_points(extracted_stakeholders)
    buckets: dict[str, list[Stakeholder]] = {name: [] for name in StakeholderMap.model_fields}

    for key, participant in people.items():
        count = meeting_counts.get(key, 0)
        stakeholder = Stakeholder(
            name=participant.name or participant.email or participant.title or UNKNOWN_PARTICIPANT,
            title=participant.title,
            email=participant.email or None,
            department=infer_department(participant.title),
            pain_points=pain_points.get(participant.name.strip().lower(), []),
            engagement_level=_engagement_level(count),
            meeting_count=count,
        )
        buckets[classify_role(participant.role)].append(stakeholder)

    stakeholder_map = StakeholderMap(**buckets)
    logger.debug(
        'stakeholders.mapped',
        total=stakeholder_map.total,
        decision_makers=len(stakeholder_map.decision_makers),
        unclassified_default=DEFAULT_BUCKET,
    )
    return stakeholder_map
