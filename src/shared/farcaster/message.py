"""
Parsing of Sign In With Farcaster messages (EIP-4361 text format).
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from .exceptions import SignInMessageError

PREAMBLE_SUFFIX = " wants you to sign in with your Ethereum account:"
ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
FID_RESOURCE_PATTERN = re.compile(r"^farcaster://fid/(\d+)$")

FIELD_NAMES = {
    "URI": "uri",
    "Version": "version",
    "Chain ID": "chain_id",
    "Nonce": "nonce",
    "Issued At": "issued_at",
    "Expiration Time": "expiration_time",
    "Not Before": "not_before",
    "Request ID": "request_id",
}
REQUIRED_FIELDS = ("uri", "version", "chain_id", "nonce", "issued_at")


def _parse_timestamp(value: str, field: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise SignInMessageError(f"Invalid {field} timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class SiweMessage:
    """A parsed sign-in message."""

    domain: str
    address: str
    uri: str
    version: str
    chain_id: int
    nonce: str
    issued_at: datetime
    statement: str | None = None
    expiration_time: datetime | None = None
    not_before: datetime | None = None
    request_id: str | None = None
    resources: tuple[str, ...] = ()

    @property
    def fid(self) -> int | None:
        """Farcaster account id claimed through a farcaster://fid/ resource."""
        for resource in self.resources:
            match = FID_RESOURCE_PATTERN.match(resource)
            if match:
                return int(match.group(1))
        return None

    @classmethod
    def parse(cls, text: str) -> "SiweMessage":
        """
        Parse the text a wallet signed.

        Args:
            text: Full message, lines separated by LF or CRLF

        Returns:
            SiweMessage with every recognised field

        Raises:
            SignInMessageError: If the text is not a well-formed message
        """
        lines = text.replace("\r\n", "\n").split("\n")
        if len(lines) < 2 or not lines[0].endswith(PREAMBLE_SUFFIX):
            raise SignInMessageError("Missing sign-in preamble")

        domain = lines[0][: -len(PREAMBLE_SUFFIX)].strip()
        if not domain:
            raise SignInMessageError("Missing domain")

        address = lines[1].strip()
        if not ADDRESS_PATTERN.match(address):
            raise SignInMessageError("Invalid address line")

        fields: dict[str, str] = {}
        statement_lines: list[str] = []
        resources: list[str] = []
        in_resources = False

        for line in lines[2:]:
            if in_resources and line.startswith("- "):
                resources.append(line[2:].strip())
                continue
            in_resources = False

            if not line.strip():
                continue
            if line.strip() == "Resources:":
                in_resources = True
                continue

            key, separator, value = line.partition(": ")
            if separator and key in FIELD_NAMES:
                name = FIELD_NAMES[key]
                if name in fields:
                    raise SignInMessageError(f"Duplicate field: {key}")
                fields[name] = value.strip()
                continue

            # Free text is only allowed before the first field
            if fields or resources:
                raise SignInMessageError("Unexpected line after message fields")
            statement_lines.append(line.strip())

        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise SignInMessageError(f"Missing fields: {', '.join(missing)}")

        try:
            chain_id = int(fields["chain_id"])
        except ValueError:
            raise SignInMessageError("Invalid chain id")

        expiration_time = fields.get("expiration_time")
        not_before = fields.get("not_before")

        return cls(
            domain=domain,
            address=address,
            uri=fields["uri"],
            version=fields["version"],
            chain_id=chain_id,
            nonce=fields["nonce"],
            issued_at=_parse_timestamp(fields["issued_at"], "Issued At"),
            statement="\n".join(statement_lines) or None,
            expiration_time=(
                _parse_timestamp(expiration_time, "Expiration Time")
                if expiration_time
                else None
            ),
            not_before=(
                _parse_timestamp(not_before, "Not Before") if not_before else None
            ),
            request_id=fields.get("request_id"),
            resources=tuple(resources),
        )
