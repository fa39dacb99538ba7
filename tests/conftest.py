from datetime import date

import pytest

from schemas import Participant

# 2024-01-10 (수요일). 미국/유럽 모두 표준시인 주
WINTER_WEEK = date(2024, 1, 10)
# 2024-07-10 (수요일). 미국/유럽 모두 서머타임인 주
SUMMER_WEEK = date(2024, 7, 10)


@pytest.fixture
def make_participant():
    """테스트용 참가자를 만듭니다."""
    def _make(name, timezone, availability, availability_type="weekly", **kwargs):
        return Participant(
            id=kwargs.pop("id", name.lower()),
            name=name,
            timezone=timezone,
            availability_type=availability_type,
            availability=availability,
            **kwargs,
        )
    return _make
