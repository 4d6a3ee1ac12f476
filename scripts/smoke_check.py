"""Drive a running deployment through the ticket lifecycle and report per step."""
import argparse
import sys

import requests

SAMPLE_TICKET = {
    "employee_id": "VPPL07",
    "employee_name": "Smoke Check",
    "employee_email": "smoke.check@venturebiz.in",
    "department": "IT",
    "priority": "Low",
    "issue_type": "Other",
    "description": "Automated smoke check, safe to close.",
}


def check(name, response, expected_status):
    if response.status_code == expected_status:
        print(f"[PASS] {name}: {response.status_code}")
        return 0
    print(f"[FAIL] {name}: {response.status_code} (Expected: {expected_status}) {response.text}")
    return 1


def run_checks(base_url, by_code=False):
    issues = 0
    api = f"{base_url}/api/tickets"

    issues += check("Health", requests.get(f"{base_url}/health", timeout=5), 200)

    r = requests.post(api, json=SAMPLE_TICKET, timeout=5)
    issues += check("Create ticket", r, 201)
    if r.status_code != 201:
        return issues
    ticket = r.json()
    # Must match the server's HELPDESK_TICKET_LOOKUP_KEY
    key = ticket["ticket_id"] if by_code else ticket["id"]
    print(f"       created {ticket['ticket_id']} (id={ticket['id']}), using key {key}")

    issues += check("Reject bad employee id", requests.post(api, json={**SAMPLE_TICKET, "employee_id": "XYZZ07"}, timeout=5), 400)
    issues += check("List tickets", requests.get(api, timeout=5), 200)
    issues += check("Fetch ticket", requests.get(f"{api}/{key}", timeout=5), 200)
    issues += check("Update status", requests.put(f"{api}/{key}/status", json={"status": "Closed"}, timeout=5), 200)
    issues += check(
        "Add comment",
        requests.post(f"{api}/{key}/comments", json={"comment": "smoke check", "author": "smoke"}, timeout=5),
        201,
    )
    issues += check("List comments", requests.get(f"{api}/{key}/comments", timeout=5), 200)
    return issues


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("base_url", nargs="?", default="http://localhost:3426")
    parser.add_argument(
        "--by-code",
        action="store_true",
        help="address tickets by ticket code (HELPDESK_TICKET_LOOKUP_KEY=ticket_id)",
    )
    args = parser.parse_args()

    print(f"Running smoke check against {args.base_url}...")
    try:
        total_issues = run_checks(args.base_url, by_code=args.by_code)
    except requests.RequestException as e:
        print(f"[ERROR] Could not connect: {e}")
        total_issues = 1

    print(f"\nSmoke check complete. Failed steps: {total_issues}")
    if total_issues > 0:
        sys.exit(1)

if __name__ == "__main__":
    main()
