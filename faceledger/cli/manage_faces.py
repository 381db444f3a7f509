"""CLI tool for enrolling, recognizing and auditing faces without the HTTP API."""
import argparse
import asyncio
import sys
from typing import List, Optional

from faceledger.core.config import settings
from faceledger.core.container import ServiceContainer
from faceledger.core.exceptions import FaceRecognitionError
from faceledger.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def enroll(container: ServiceContainer, args: argparse.Namespace) -> None:
    result = await container.orchestrator.enroll(args.name, args.image)
    print(f"Face registered for {result.name} with ID: {result.identity_id}")


async def recognize(container: ServiceContainer, args: argparse.Namespace) -> None:
    result = await container.orchestrator.recognize(args.image, threshold=args.threshold)
    for i, outcome in enumerate(result.outcomes, 1):
        match = outcome.match
        status = "matched" if match.matched else "unmatched"
        print(f"Face {i}: {match.name} ({status}, confidence {match.confidence:.2f}, "
              f"distance {match.distance:.4f})")


async def list_faces(container: ServiceContainer, args: argparse.Namespace) -> None:
    records = await container.orchestrator.list_identities()
    print(f"{len(records)} enrolled face(s)")
    for record in records:
        print(f"{record.id}\t{record.name}\t{record.enrolled_at}\t{record.source_reference or ''}")


async def history(container: ServiceContainer, args: argparse.Namespace) -> None:
    attempts = await container.orchestrator.history(args.limit)
    for attempt in attempts:
        status = "matched" if attempt.matched else "unmatched"
        print(f"{attempt.occurred_at}\t{attempt.matched_name}\t{attempt.confidence:.2f}\t{status}")


async def delete(container: ServiceContainer, args: argparse.Namespace) -> None:
    await container.orchestrator.delete_identity(args.face_id)
    print(f"Face with ID {args.face_id} deleted")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage enrolled faces and the recognition ledger")
    parser.add_argument("--database-url", help="Overrides DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    enroll_parser = subparsers.add_parser("enroll", help="Enroll the single face in an image")
    enroll_parser.add_argument("name", help="Name to enroll the face under")
    enroll_parser.add_argument("image", help="Path of the image")
    enroll_parser.set_defaults(handler=enroll)

    recognize_parser = subparsers.add_parser("recognize", help="Recognize faces in an image")
    recognize_parser.add_argument("image", help="Path of the image")
    recognize_parser.add_argument("--threshold", type=float, help="Match distance threshold")
    recognize_parser.set_defaults(handler=recognize)

    list_parser = subparsers.add_parser("list", help="List enrolled faces")
    list_parser.set_defaults(handler=list_faces)

    history_parser = subparsers.add_parser("history", help="Show recent recognition attempts")
    history_parser.add_argument("--limit", type=int, default=settings.DEFAULT_HISTORY_LIMIT,
                                help="Number of entries to show")
    history_parser.set_defaults(handler=history)

    delete_parser = subparsers.add_parser("delete", help="Delete an enrolled face")
    delete_parser.add_argument("face_id", type=int, help="ID of the face to delete")
    delete_parser.set_defaults(handler=delete)

    return parser


async def run_command(args: argparse.Namespace, container: Optional[ServiceContainer] = None) -> int:
    container = container or ServiceContainer()
    try:
        if not container.initialized:
            await container.initialize(database_url=args.database_url)
        await args.handler(container, args)
    except FaceRecognitionError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await container.cleanup()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    setup_logging()
    args = build_parser().parse_args(argv)
    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
