"""
Mocks - Offline stand-ins for the GitHub API, used by tests and demos
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from .github_client import APIClient


def generate_contribution_weeks(year: int) -> List[Dict[str, Any]]:
    """
    A full calendar year in the GraphQL "weeks" shape.

    Weeks start on Sunday; the first and last weeks may be partial. Counts
    follow a fixed pattern with regular empty days, so output is stable.
    """
    weeks: List[Dict[str, Any]] = []
    current: List[Dict[str, Any]] = []
    day = date(year, 1, 1)
    while day.year == year:
        ordinal = day.timetuple().tm_yday
        count = 0 if ordinal % 5 == 0 else (ordinal * 37) % 13
        current.append({"contributionCount": count, "date": day.isoformat()})
        if day.isoweekday() == 6:  # Saturday closes the week
            weeks.append({"contributionDays": current})
            current = []
        day += timedelta(days=1)
    if current:
        weeks.append({"contributionDays": current})
    return weeks


def generate_contributions_response(username: str, year: int) -> Dict[str, Any]:
    """GraphQL "data" payload for the contributions query"""
    weeks = generate_contribution_weeks(year)
    total = sum(d["contributionCount"] for w in weeks for d in w["contributionDays"])
    return {
        "user": {
            "login": username,
            "contributionsCollection": {
                "contributionCalendar": {
                    "totalContributions": total,
                    "weeks": weeks,
                }
            },
        }
    }


class MockGitHubClient(APIClient):
    """
    Answers the viewer, join-date and contributions queries from memory.

    Args:
        username: Login returned for the authenticated user
        join_year: Year returned as the account creation date
        mock_data: Fixed contributions payload; generated per year when None
        err: Raised from every call when set
    """

    def __init__(self, username: str = "", join_year: int = 2008,
                 mock_data: Optional[Dict[str, Any]] = None, err: Optional[Exception] = None):
        self.username = username
        self.join_year = join_year
        self.mock_data = mock_data
        self.err = err
        self.calls: List[Dict[str, Any]] = []

    def do(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append({"query": query, "variables": variables})
        if self.err is not None:
            raise self.err

        if "viewer" in query:
            return {"viewer": {"login": self.username}}
        if "createdAt" in query:
            return {"user": {"createdAt": f"{self.join_year}-01-01T00:00:00Z"}}
        if "contributionsCollection" in query:
            if self.mock_data is not None:
                return self.mock_data
            year = int(variables["from"][:4])
            return generate_contributions_response(variables["username"], year)
        raise ValueError(f"unexpected query: {query}")
