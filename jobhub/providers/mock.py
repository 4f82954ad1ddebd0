"""Offline job provider for demos and tests when no API key is configured."""
from __future__ import annotations

from jobhub.log import get_logger
from jobhub.models import Job, JobSource, LinkedInProfile, SearchFilters
from jobhub.providers.base import JobProvider

log = get_logger(__name__)

_COMPANIES: list[tuple[str, str]] = [
    ("台灣積體電路製造", "半導體"),
    ("趨勢科技", "軟體及網路"),
    ("國泰金控", "金融保險"),
    ("Appier", "軟體及網路"),
    ("聯發科技", "半導體"),
    ("Gogoro", "製造業"),
    ("KKday", "零售及電商"),
]

_CITIES: list[str] = ["台北市", "新竹縣市", "台中市", "高雄市", "新北市"]

_SOURCES: list[JobSource] = [
    JobSource.LINKEDIN, JobSource.BANK_104, JobSource.BANK_1111,
    JobSource.CAKERESUME, JobSource.YOURATOR,
]


class MockProvider(JobProvider):
    name = "mock"

    def __init__(self, env_getter=None, count: int = 25) -> None:
        self.count = count

    def fetch_jobs(self, filters: SearchFilters) -> list[Job]:
        title = filters.job_title.strip() or "軟體工程師"
        log.info("MockProvider generating %d sample jobs", self.count)
        jobs: list[Job] = []
        for n in range(1, self.count + 1):
            company, industry = _COMPANIES[n % len(_COMPANIES)]
            location = (
                filters.locations[n % len(filters.locations)]
                if filters.locations
                else _CITIES[n % len(_CITIES)]
            )
            jobs.append(
                Job(
                    id=f"job-{n}",
                    title=f"{title}（{n}）",
                    company=company,
                    location=location,
                    salary=f"NT$ {50 + n}K - {70 + n}K / 月",
                    experience=filters.experience_levels[0] if filters.experience_levels else "1-3 年",
                    industry=filters.industries[0] if filters.industries else industry,
                    source=_SOURCES[n % len(_SOURCES)],
                    description=f"{company} 正在招募{title}，負責產品開發與維運。",
                    requirements=("熟悉 Python 或 Go", "具團隊合作精神"),
                    posted_at=f"{n % 7 + 1} 天前",
                    link=f"https://example.com/jobs/{n}",
                    linkedin_employees=(
                        LinkedInProfile("王小明", f"Senior {title}", "https://www.linkedin.com/in/example-a"),
                        LinkedInProfile("陳怡君", "Engineering Manager", "https://www.linkedin.com/in/example-b"),
                    ),
                    mentor_analysis="多數成功者具備資訊相關學歷與三年以上實務經驗。",
                    company_reviews="員工普遍肯定福利與學習資源，部分評論提到工時偏長。",
                )
            )
        return jobs
