"""Job search data model.

Attributes are snake_case; ``from_dict``/``to_dict`` translate to and from the
camelCase JSON used by the web front end and the request handler.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from job_scout.constants import (
    DEFAULT_COUNTRY,
    DEFAULT_SAVED_JOB_STATUS,
    MAX_RATING,
    MIN_RATING,
    SAVED_JOB_STATUSES,
)
from job_scout.exceptions import QueryValidationError, SavedJobValidationError


@dataclass
class JobSearchQuery:
    """
    A user's search request.

    Attributes:
        sources: Source identifiers to search, in priority order
        poste: Free-text role query (required)
        technologies: Keywords appended to the role query
        location: Search location; adapters default to "France"
        exclude_terms: Terms whose listings are dropped from the results
        remote_only: Ask each site for remote-only postings
        salary_min: Drop listings whose known maximum salary is below this
    """

    sources: List[str]
    poste: str
    technologies: List[str] = field(default_factory=list)
    location: Optional[str] = None
    exclude_terms: List[str] = field(default_factory=list)
    remote_only: bool = False
    salary_min: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobSearchQuery":
        """
        Create a query from its JSON form.

        Args:
            data: camelCase query dictionary

        Returns:
            Validated JobSearchQuery

        Raises:
            QueryValidationError: If the payload is not a usable query
        """
        if not isinstance(data, dict):
            raise QueryValidationError("Search query must be a JSON object")

        remote_only = data.get("remoteOnly", False)
        if remote_only is None:
            remote_only = False
        if not isinstance(remote_only, bool):
            raise QueryValidationError(f"remoteOnly must be true or false: {remote_only!r}")

        salary_min = data.get("salaryMin")
        if salary_min not in (None, ""):
            try:
                salary_min = int(salary_min)
            except (TypeError, ValueError) as e:
                raise QueryValidationError(f"salaryMin must be a number: {salary_min!r}") from e
        else:
            salary_min = None

        query = cls(
            sources=_string_list(data.get("sources"), "sources"),
            poste=str(data.get("poste") or "").strip(),
            technologies=_string_list(data.get("technologies"), "technologies"),
            location=(str(data["location"]).strip() or None) if data.get("location") else None,
            exclude_terms=_string_list(data.get("excludeTerms"), "excludeTerms"),
            remote_only=remote_only,
            salary_min=salary_min,
        )
        query.validate()
        return query

    def validate(self) -> None:
        """Validate required fields."""
        if not self.sources:
            raise QueryValidationError("At least one source is required")
        if not self.poste:
            raise QueryValidationError("poste is required")

    def keywords(self) -> str:
        """Role and technologies joined into one keyword string."""
        return " ".join([self.poste, *self.technologies])

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "sources": list(self.sources),
            "poste": self.poste,
            "technologies": list(self.technologies),
            "excludeTerms": list(self.exclude_terms),
            "remoteOnly": self.remote_only,
        }
        if self.location:
            result["location"] = self.location
        if self.salary_min is not None:
            result["salaryMin"] = self.salary_min
        return result


def _string_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise QueryValidationError(f"{name} must be a list of strings")
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass
class PartialJobListing:
    """Stub built from a search results card, consumed by detail fetching."""

    url: str = ""
    title: str = ""
    source: str = ""
    company: Optional[str] = None
    location: Optional[str] = None

    def is_complete(self) -> bool:
        """True when url, title and source are all present."""
        return bool(self.url and self.title and self.source)

    def to_dict(self) -> Dict[str, Any]:
        result = {"url": self.url, "title": self.title, "source": self.source}
        if self.company:
            result["company"] = self.company
        if self.location:
            result["location"] = self.location
        return result


@dataclass(frozen=True)
class JobListing:
    """A normalized job posting. Immutable once assembled."""

    id: str
    title: str
    company: str
    description: str
    url: str
    location: str
    source: str
    posted_at: str
    scraped_at: str
    country: str = DEFAULT_COUNTRY
    technologies: List[str] = field(default_factory=list)
    remote: bool = False
    contract_type: str = ""
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_range: Optional[str] = None

    def has_salary(self) -> bool:
        return self.salary_range is not None

    def to_dict(self) -> Dict[str, Any]:
        """JSON form; salary keys are present only when a salary was found."""
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "url": self.url,
            "location": self.location,
            "country": self.country,
            "source": self.source,
            "technologies": list(self.technologies),
            "remote": self.remote,
            "contractType": self.contract_type,
            "postedAt": self.posted_at,
            "scrapedAt": self.scraped_at,
        }
        if self.has_salary():
            result["salaryMin"] = self.salary_min
            result["salaryMax"] = self.salary_max
            result["salaryRange"] = self.salary_range
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobListing":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            company=data.get("company", ""),
            description=data.get("description", ""),
            url=data["url"],
            location=data.get("location", ""),
            source=data.get("source", ""),
            posted_at=data.get("postedAt", ""),
            scraped_at=data.get("scrapedAt", ""),
            country=data.get("country") or DEFAULT_COUNTRY,
            technologies=list(data.get("technologies") or []),
            remote=bool(data.get("remote", False)),
            contract_type=data.get("contractType") or "",
            salary_min=data.get("salaryMin"),
            salary_max=data.get("salaryMax"),
            salary_range=data.get("salaryRange"),
        )


@dataclass
class SavedJob:
    """
    A listing bookmarked by a user, with their application tracking.

    The listing is kept as a snapshot so a saved job survives the stored
    listing being refreshed by a later search.

    Attributes:
        user_id: Owner of the bookmark
        job: Listing as it was when saved
        status: Application step, one of SAVED_JOB_STATUSES
        notes: Free-text notes
        tags: User labels
        rating: 1-5 stars, or None when unrated
        saved_at: ISO-8601 time of the first save (set by storage)
    """

    user_id: str
    job: JobListing
    status: str = DEFAULT_SAVED_JOB_STATUS
    notes: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    rating: Optional[int] = None
    saved_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedJob":
        """
        Create a saved job from its JSON form.

        Args:
            data: {"userId", "job": <JobListing JSON>, "status", "notes", "tags", "rating"}

        Returns:
            Validated SavedJob

        Raises:
            SavedJobValidationError: If the payload is not a usable saved job
        """
        if not isinstance(data, dict):
            raise SavedJobValidationError("Saved job must be a JSON object")

        user_id = str(data.get("userId") or "").strip()
        if not user_id:
            raise SavedJobValidationError("userId is required")

        job_data = data.get("job")
        if not isinstance(job_data, dict) or not job_data.get("id") or not job_data.get("url"):
            raise SavedJobValidationError("job with an id and a url is required")

        status = data.get("status") or DEFAULT_SAVED_JOB_STATUS
        if status not in SAVED_JOB_STATUSES:
            raise SavedJobValidationError(
                f"status must be one of {', '.join(SAVED_JOB_STATUSES)}: {status!r}"
            )

        tags = data.get("tags")
        if tags is None:
            tags = []
        if isinstance(tags, str) or not isinstance(tags, list):
            raise SavedJobValidationError("tags must be a list of strings")

        rating = data.get("rating")
        if rating is not None and (
            isinstance(rating, bool)
            or not isinstance(rating, int)
            or not MIN_RATING <= rating <= MAX_RATING
        ):
            raise SavedJobValidationError(
                f"rating must be an integer from {MIN_RATING} to {MAX_RATING}: {rating!r}"
            )

        notes = str(data.get("notes") or "").strip()

        return cls(
            user_id=user_id,
            job=JobListing.from_dict(job_data),
            status=status,
            notes=notes or None,
            tags=[str(tag).strip() for tag in tags if str(tag).strip()],
            rating=rating,
            saved_at=data.get("savedAt") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Listing JSON extended with the tracking fields."""
        result = self.job.to_dict()
        result.update(
            {
                "userId": self.user_id,
                "status": self.status,
                "tags": list(self.tags),
                "savedAt": self.saved_at,
            }
        )
        if self.notes:
            result["notes"] = self.notes
        if self.rating is not None:
            result["rating"] = self.rating
        return result
