"""Example: drive the client reconciler against a running gateway (no UI).

Start the gateway first (``python app.py``) and set RECORDS_API_BASE_URL.
"""

from src.checkin_records.checkin_records.client.api import RecordsApiClient
from src.checkin_records.checkin_records.client.reconciler import RecordsReconciler
from src.checkin_records.checkin_records.core.enums import Ache, Change, Role


def main():
    reconciler = RecordsReconciler(RecordsApiClient.from_env())
    reconciler.subscribe(lambda r: print(f"[{r.role.value}/{r.owner_id}] {len(r.records)} record(s)"))

    reconciler.refresh()
    reconciler.add_record(aches=Ache.BACK, minutes=5, change=Change.IMPROVED)

    reconciler.set_scope_and_refresh(role=Role.ADMIN)
    for record in reconciler.records:
        print(record.timestamp, record.owner_id, record.summary)


if __name__ == "__main__":
    main()
