"""Seed the local problem pool with the per-tier sample problems.
Run with: python seed_data.py [--reset]
"""
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app import create_app
from app.extensions import db
from app.models import Problem
from app.services.codeforces_service import CodeforcesService


def seed(reset=False):
    if reset:
        deleted = Problem.query.delete()
        db.session.commit()
        print(f"Removed {deleted} cached problems")
    count = CodeforcesService.seed_sample_problems()
    if count:
        print(f"Seeded {count} sample problems")
    else:
        print("Problem pool already populated, nothing to do")


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        seed(reset='--reset' in sys.argv[1:])
