import csv
import io
from app.models.contest import Contest
from app.services import BaseService
from app.services.contest import ContestService


CSV_HEADER = (
    "Title",
    "Description",
    "Status",
    "Total Votes",
    "Paid",
    "Vote Price",
    "Created At",
    "URL",
)


def format_price(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ExportService(BaseService):
    _contest_service: ContestService = None

    @property
    def contest_service(self):
        if self._contest_service is None:
            self._contest_service = ContestService(self.store)
        return self._contest_service

    @staticmethod
    def _row(contest: Contest, host: str) -> list[str]:
        return [
            contest.title,
            contest.description or "",
            contest.status.value,
            str(contest.total_votes),
            "Yes" if contest.is_paid else "No",
            format_price(contest.vote_price if contest.is_paid else 0),
            contest.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"{host}/vote/{contest.url_slug}",
        ]

    async def export_csv(self, host: str) -> str:
        contests = await self.contest_service.list_contests()

        buffer = io.StringIO()
        buffer.write(",".join(CSV_HEADER) + "\n")
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for contest in contests:
            writer.writerow(self._row(contest, host))
        return buffer.getvalue()
