# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import sys
from dataclasses import dataclass
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from azure.identity import InteractiveBrowserCredential

from odata_query import Direction, ODataClient, ODataConfig, RequestError, TelemetryConfig


@dataclass
class Person:
    user_name: str
    first_name: str
    last_name: str

    @classmethod
    def from_json(cls, data):
        return cls(data["UserName"], data["FirstName"], data["LastName"])


entered = input("Enter OData service URL (e.g. https://services.example.com/odata): ").strip()
if not entered:
    print("No URL entered; exiting.")
    sys.exit(1)

config = ODataConfig(
    page_size=20,
    max_pages=50,
    telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"),
)

with ODataClient(entered, InteractiveBrowserCredential(), config) as client:
    people = (client.query.builder("People", Person.from_json)
              .filter("FirstName ne 'Russell'")
              .order_by("LastName", Direction.ASCENDING)
              .select("UserName", "FirstName", "LastName")
              .get_all())
    print(f"Fetched {len(people)} people")
    for p in people[:5]:
        print(f"  {p.last_name}, {p.first_name} ({p.user_name})")

    try:
        me = (client.query.builder("People('{user}')", Person.from_json)
              .path_param("user", people[0].user_name if people else "russellwhyte")
              .get())
        print(f"First person: {me}")
    except RequestError as e:
        print(f"Lookup failed: {e.status} {e.body}")

    for page in client.query.builder("Airlines").count().pages():
        print(f"Airlines page: {len(page.value)} of {page.count}")
