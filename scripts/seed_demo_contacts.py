#!/usr/bin/env python3
"""Seed demo contacts into the configured Neo4j store. Does nothing if contacts already exist.
Run from repo root: python scripts/seed_demo_contacts.py
"""
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(REPO_ROOT / ".env")
sys.path.insert(0, str(REPO_ROOT / "src"))

from api.main import STORAGE_NEO4J, _get_driver, build_services  # noqa: E402
from reconnect.infrastructure import ensure_constraints  # noqa: E402

driver = _get_driver()
try:
    driver.verify_connectivity()
except Exception as e:
    print(f"Neo4j not reachable: {e}", file=sys.stderr)
    driver.close()
    sys.exit(1)

try:
    ensure_constraints(driver)
    services = build_services(STORAGE_NEO4J, driver)
    created = services.contacts.seed_demo_contacts()
finally:
    driver.close()

if created:
    print(f"Seeded {created} demo contacts")
else:
    print("Contacts already present; nothing seeded")
