"""
Capture one photo and print its description via the gateway.

Usage:
    snapscribe-describe                      # webcam (CAMERA_INDEX, default 0)
    snapscribe-describe --file cat.jpg       # describe an existing photo
    snapscribe-describe --mock               # fake camera frame, no hardware
    snapscribe-describe --retries 2          # retry from the Failed state

GATEWAY_URL (default http://127.0.0.1:3000) points at a running snapscribe-serve.
"""

import argparse
import sys

from snapscribe.adapters.gateway.http_gateway import HttpGateway
from snapscribe.orchestrator.errors import CaptureError
from snapscribe.orchestrator.state_machine import DescribeSession
from snapscribe.services.settings import gateway_url_from_env, load_env_file, configure_logging
from snapscribe.services.status_store import StatusStore


def build_camera(status, args):
    if args.file:
        from snapscribe.adapters.camera.file_camera import FileCamera
        return FileCamera(status, args.file)
    if args.mock:
        from snapscribe.adapters.camera.mock_camera import MockCamera
        return MockCamera(status)
    from snapscribe.adapters.camera.cv2_camera import CV2Camera
    return CV2Camera(status)


def parse_args(argv):
    p = argparse.ArgumentParser(prog="snapscribe-describe", description=__doc__.strip().splitlines()[0])
    src = p.add_mutually_exclusive_group()
    src.add_argument("--file", help="describe this image file instead of using the webcam")
    src.add_argument("--mock", action="store_true", help="use a fake camera frame")
    p.add_argument("--gateway", default=None, help="gateway base URL (overrides GATEWAY_URL)")
    p.add_argument("--retries", type=int, default=0, help="extra describe attempts after a failure")
    return p.parse_args(argv)


def run(session: DescribeSession, retries: int = 0) -> int:
    try:
        session.capture()
    except CaptureError as e:
        print(f"Error: Failed to take picture, please try again. ({e})", file=sys.stderr)
        return 2

    result = session.describe()
    attempts = 0
    while not result.ok and attempts < retries:
        attempts += 1
        print(f"retrying ({attempts}/{retries})...", file=sys.stderr)
        result = session.describe()

    print(session.display_text())
    session.retake()
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    load_env_file()
    configure_logging(default_level="WARNING")
    args = parse_args(argv)
    status = StatusStore()
    camera = build_camera(status, args)
    gateway = HttpGateway(status, base_url=args.gateway or gateway_url_from_env())
    try:
        return run(DescribeSession(camera=camera, gateway=gateway, status_store=status), retries=args.retries)
    finally:
        gateway.close()
        if hasattr(camera, "release"):
            camera.release()


if __name__ == "__main__":
    sys.exit(main())
