#!/usr/bin/env python3
"""
Recommendation Pipeline Try-Out Script

Runs the recommendation pipeline locally against the real Gemini API and
real link probes, without Supabase or the dashboard.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --interests "robotics" --career "mechanical engineer"
    python scripts/try_recommendations.py --fallback-only
"""

import argparse
import asyncio
import json
import logging

from dotenv import load_dotenv

load_dotenv()

from learnpath.clients import create_gemini_client, create_link_probe_client  # noqa: E402
from learnpath.schemas.recommendations import StudentProfile  # noqa: E402
from learnpath.services.recommendation_service import generate_recommendations  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate recommendations for a sample profile")
    parser.add_argument("--interests", default="robotics")
    parser.add_argument("--performance", default="A average")
    parser.add_argument("--career", default="mechanical engineer")
    parser.add_argument("--skills", default="CAD")
    parser.add_argument(
        "--fallback-only",
        action="store_true",
        help="Skip the Gemini call and print the default set",
    )
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    profile = StudentProfile(
        interests=args.interests,
        performance=args.performance,
        career_aspirations=args.career,
        skill_building_needs=args.skills,
    )

    gemini_client = None if args.fallback_only else create_gemini_client()

    async with create_link_probe_client() as http_client:
        result = await generate_recommendations(profile, gemini_client, http_client)

    print("=" * 60)
    print(f"Source: {result.source}")
    print("=" * 60)
    print(json.dumps([rec.model_dump() for rec in result.recommendations], indent=2))


if __name__ == "__main__":
    asyncio.run(main())
