from __future__ import annotations

import argparse
import sys

from socketlabs.client import EmailClient
from socketlabs.errors import ClientError
from socketlabs.logging_utils import setup_logging
from socketlabs.models import CustomHeader, EmailAddress, EmailMessage, SendResult
from socketlabs.settings import load_settings


def build_example_message() -> EmailMessage:
    return EmailMessage(
        from_=EmailAddress("foo@bar.com"),
        to=(EmailAddress("bar@foo.com"),),
        subject="Hello from the socketlabs example",
        text_body="Hello, text world!",
        html_body="<p><strong>Hello, HTML world!</strong></p>",
        custom_headers=(CustomHeader("x-example", "hey hey hey"),),
    )


def format_result(result: SendResult) -> str:
    lines = [
        f"success: {result.success}",
        f"error_code: {result.error_code}",
        f"transaction_receipt: {result.transaction_receipt}",
    ]
    lines.extend(f"error: {e}" for e in result.messages_errors)
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="socketlabs-send-email",
        description="Send a fixed demonstration email through the SocketLabs Injection API.",
    )
    parser.parse_args()

    try:
        settings = load_settings()
        setup_logging(settings.log_level, settings.log_file)
        client = EmailClient(
            settings.server_id,
            settings.api_key,
            api_url=settings.api_url,
            timeout_sec=settings.timeout_sec,
        )
        result = client.send(build_example_message())
    except ClientError as exc:
        print(f"error ({exc.kind.value}): {exc}", file=sys.stderr)
        return 1

    print(format_result(result))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
