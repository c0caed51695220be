import csv
import io
from typing import Iterable

from app.models.subscriber import Subscriber
from app.services.countdown import as_utc

CSV_HEADERS = ["Position", "Email", "Nom", "Entreprise", "Date d'inscription"]


def subscribers_to_csv(subscribers: Iterable[Subscriber]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for s in subscribers:
        created = as_utc(s.created_at)
        writer.writerow([
            s.position,
            s.email,
            s.name or "",
            s.company or "",
            created.strftime("%d/%m/%Y") if created else "",
        ])
    return buffer.getvalue()
