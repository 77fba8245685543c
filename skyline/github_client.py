"""
GitHub Client - Contribution calendar retrieval over the GraphQL API

The geometry code never talks to GitHub; it only receives the
ContributionGrid produced here (or by a mock).
"""
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pydantic
import requests
from pydantic import BaseModel, Field

from .config import Settings
from .errors import GraphQLError, NetworkError, ValidationError
from .models import ContributionDay, ContributionGrid
from .utils import GITHUB_LAUNCH_YEAR

logger = logging.getLogger(__name__)

VIEWER_QUERY = """
query {
    viewer {
        login
    }
}"""

JOIN_DATE_QUERY = """
query UserJoinDate($username: String!) {
    user(login: $username) {
        createdAt
    }
}"""

CONTRIBUTIONS_QUERY = """
query ContributionGraph($username: String!, $from: DateTime!, $to: DateTime!) {
    user(login: $username) {
        login
        contributionsCollection(from: $from, to: $to) {
            contributionCalendar {
                totalContributions
                weeks {
                    contributionDays {
                        contributionCount
                        date
                    }
                }
            }
        }
    }
}"""


# --- Response models ---

class ContributionDayModel(BaseModel):
    contribution_count: int = Field(alias="contributionCount", ge=0)
    date: str


class WeekModel(BaseModel):
    contribution_days: List[ContributionDayModel] = Field(alias="contributionDays")


class CalendarModel(BaseModel):
    total_contributions: int = Field(0, alias="totalContributions")
    weeks: List[WeekModel]


class CollectionModel(BaseModel):
    contribution_calendar: CalendarModel = Field(alias="contributionCalendar")


class UserModel(BaseModel):
    login: str
    contributions_collection: CollectionModel = Field(alias="contributionsCollection")


class ContributionsResponse(BaseModel):
    user: Optional[UserModel] = None

    def to_grid(self) -> ContributionGrid:
        calendar = self.user.contributions_collection.contribution_calendar
        return [
            [
                ContributionDay(date=date.fromisoformat(day.date[:10]), count=day.contribution_count)
                for day in week.contribution_days
            ]
            for week in calendar.weeks
        ]


# --- Transport ---

class APIClient(ABC):
    """Anything that can run a GraphQL query and return its "data" object"""

    @abstractmethod
    def do(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        pass


class GraphQLAPIClient(APIClient):
    def __init__(self, token: str, url: str = "https://api.github.com/graphql", timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def do(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self.session.post(
                self.url,
                headers=self.headers,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError("GraphQL request failed", e) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise GraphQLError("GraphQL response is not JSON", e) from e

        if payload.get("errors"):
            messages = "; ".join(err.get("message", "unknown error") for err in payload["errors"])
            raise GraphQLError(f"GraphQL query failed: {messages}")
        return payload.get("data") or {}


# --- GitHub operations ---

class GitHubClient:
    def __init__(self, api: APIClient):
        self.api = api

    def get_authenticated_user(self) -> str:
        """Login of the user owning the token"""
        data = self.api.do(VIEWER_QUERY)
        login = (data.get("viewer") or {}).get("login")
        if not login:
            raise ValidationError("received empty username from GitHub API")
        return login

    def get_user_join_year(self, username: str) -> int:
        """Year the account was created"""
        if not username:
            raise ValidationError("username cannot be empty")
        data = self.api.do(JOIN_DATE_QUERY, {"username": username})
        user = data.get("user")
        if not user or not user.get("createdAt"):
            raise ValidationError(f"user {username!r} not found")
        try:
            return datetime.fromisoformat(user["createdAt"].replace("Z", "+00:00")).year
        except ValueError as e:
            raise GraphQLError(f"unexpected join date {user['createdAt']!r}", e) from e

    def fetch_contributions(self, username: str, year: int) -> ContributionGrid:
        """
        Contribution calendar of one year.

        Args:
            username: GitHub login
            year: Calendar year, 2008 or later

        Returns:
            The weeks of the calendar, as returned by GitHub
        """
        if not username:
            raise ValidationError("username cannot be empty")
        if year < GITHUB_LAUNCH_YEAR:
            raise ValidationError(f"year cannot be before GitHub's launch ({GITHUB_LAUNCH_YEAR})")

        variables = {
            "username": username,
            "from": f"{year}-01-01T00:00:00Z",
            "to": f"{year}-12-31T23:59:59Z",
        }
        logger.debug("Fetching contributions for %s in %d", username, year)
        data = self.api.do(CONTRIBUTIONS_QUERY, variables)

        try:
            response = ContributionsResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise GraphQLError("unexpected contributions response", e) from e
        if response.user is None:
            raise ValidationError(f"user {username!r} not found")
        return response.to_grid()


def initialize_github_client(settings: Optional[Settings] = None) -> GitHubClient:
    """Client backed by the real GraphQL API, authenticated from the environment"""
    if settings is None:
        settings = Settings.from_env()
    if not settings.github_token:
        raise NetworkError("no GitHub token found; set GITHUB_TOKEN or GH_TOKEN")
    return GitHubClient(GraphQLAPIClient(settings.github_token, url=settings.graphql_url))
