"""
Achievement Evaluator - badges and reward points from a donor's donation history

History is expected newest first (the order donations are fetched in).
Everything is recomputed on each call; nothing here is stored.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

URGENT_LEVELS = frozenset({'urgent', 'critical'})

# Points system
POINTS_PER_DONATION = 50


@dataclass(frozen=True)
class Donation:
    timestamp: datetime
    status: str
    request_urgency: Optional[str] = None


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    name: str
    description: str
    points: int
    kind: str  # 'count' or 'special'
    threshold: Optional[int] = None
    criterion: Optional[str] = None
    motto: str = ''
    icon: str = 'award'


@dataclass(frozen=True)
class AchievementStatus:
    definition: AchievementDefinition
    unlocked: bool
    progress: int
    threshold: Optional[int]
    unlocked_at: Optional[datetime] = None


@dataclass(frozen=True)
class AchievementReport:
    statuses: list
    total_points: int
    completed_count: int

    @property
    def unlocked(self):
        return [status for status in self.statuses if status.unlocked]


ACHIEVEMENTS = (
    AchievementDefinition(
        id='first_drop',
        name='First Drop',
        description='Completed your first blood donation',
        motto='The journey begins with a single drop.',
        points=50,
        kind='count',
        threshold=1,
        icon='droplet',
    ),
    AchievementDefinition(
        id='regular_hero',
        name='Regular Hero',
        description='Completed 3 blood donations',
        motto='Consistency saves lives.',
        points=150,
        kind='count',
        threshold=3,
        icon='droplet',
    ),
    AchievementDefinition(
        id='bronze_guardian',
        name='Bronze Guardian',
        description='Completed 5 blood donations',
        motto='A pillar of hope for the community.',
        points=300,
        kind='count',
        threshold=5,
        icon='shield',
    ),
    AchievementDefinition(
        id='silver_savior',
        name='Silver Savior',
        description='Completed 10 blood donations',
        motto='Double digits, countless smiles.',
        points=750,
        kind='count',
        threshold=10,
        icon='star',
    ),
    AchievementDefinition(
        id='gold_legend',
        name='Gold Legend',
        description='Completed 25 blood donations',
        motto='A lifetime of giving.',
        points=2000,
        kind='count',
        threshold=25,
        icon='trophy',
    ),
    AchievementDefinition(
        id='critical_responder',
        name='Critical Responder',
        description='Responded to an urgent request',
        motto='There when it matters most.',
        points=500,
        kind='special',
        criterion='urgent_donation',
        icon='heart',
    ),
)


def is_urgent_donation(donation) -> bool:
    urgency = donation.request_urgency
    if not isinstance(urgency, str):
        return False
    return urgency.lower() in URGENT_LEVELS


# Special criteria by name
CRITERIA = {
    'urgent_donation': is_urgent_donation,
}


def completed_donations(history, now=None):
    """
    Completed donations from a newest-first history, still newest first.
    With `now`, donations stamped in the future are left out.
    """
    completed = []
    for donation in history:
        if donation.status != 'completed':
            continue
        if now is not None and donation.timestamp > now:
            continue
        completed.append(donation)
    return completed


def nth_oldest_timestamp(completed, n):
    """
    Timestamp of the n-th completed donation counting from the oldest.

    Walks the newest-first list from its end; returns None when there are
    fewer than n donations.
    """
    if n < 1:
        return None
    seen = 0
    for donation in reversed(completed):
        seen += 1
        if seen == n:
            return donation.timestamp
    return None


def _count_status(definition, completed):
    count = len(completed)
    threshold = definition.threshold or 0
    unlocked = threshold > 0 and count >= threshold
    return AchievementStatus(
        definition=definition,
        unlocked=unlocked,
        progress=min(count, threshold),
        threshold=threshold,
        unlocked_at=nth_oldest_timestamp(completed, threshold) if unlocked else None,
    )


def _special_status(definition, completed):
    predicate = CRITERIA.get(definition.criterion)
    if predicate is None:
        logger.warning(f"Unknown achievement criterion '{definition.criterion}' for {definition.id}")
        return AchievementStatus(definition=definition, unlocked=False, progress=0, threshold=None)

    for donation in reversed(completed):
        if predicate(donation):
            return AchievementStatus(
                definition=definition,
                unlocked=True,
                progress=1,
                threshold=None,
                unlocked_at=donation.timestamp,
            )
    return AchievementStatus(definition=definition, unlocked=False, progress=0, threshold=None)


def evaluate_achievements(history, catalog=ACHIEVEMENTS, now=None) -> AchievementReport:
    """
    Compute badge status and total points for one donor.

    Args:
        history: Donation records, newest first
        catalog: Achievement definitions; output keeps this order
        now: Optional cut-off, donations after it are ignored

    Returns:
        AchievementReport with one status per definition
    """
    completed = completed_donations(history, now)

    statuses = []
    for definition in catalog:
        if definition.kind == 'count':
            statuses.append(_count_status(definition, completed))
        elif definition.kind == 'special':
            statuses.append(_special_status(definition, completed))
        else:
            logger.warning(f"Unknown achievement kind '{definition.kind}' for {definition.id}")
            statuses.append(AchievementStatus(definition=definition, unlocked=False, progress=0, threshold=None))

    total_points = len(completed) * POINTS_PER_DONATION
    total_points += sum(status.definition.points for status in statuses if status.unlocked)

    return AchievementReport(statuses=statuses, total_points=total_points, completed_count=len(completed))
