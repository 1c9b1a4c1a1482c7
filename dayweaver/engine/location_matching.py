"""Location compatibility between suggestions and gaps."""

from typing import Optional
from dayweaver.models.gap import Gap, LocationLabel
from dayweaver.models.suggestion import Suggestion, LocationPreference


_ACCEPTED_LABELS = {
    LocationPreference.HOME: {LocationLabel.HOME},
    LocationPreference.WORKPLACE: {LocationLabel.WORKPLACE},
    LocationPreference.NO_PREFERENCE: {LocationLabel.HOME, LocationLabel.WORKPLACE, LocationLabel.OTHER},
}


def is_location_compatible(
    preference: LocationPreference,
    label: Optional[LocationLabel],
) -> bool:
    """Check whether a location preference allows a gap's location label.

    Unlabeled gaps accept every suggestion. A labeled gap accepts suggestions with
    no preference, or whose preference names the gap's location.
    """
    if label is None:
        return True
    return LocationLabel(label) in _ACCEPTED_LABELS[LocationPreference(preference)]


def can_use_gap(suggestion: Suggestion, gap: Gap) -> bool:
    """Check whether a suggestion may be placed in a gap at all (location only)."""
    return is_location_compatible(suggestion.location_preference, gap.location_label)
