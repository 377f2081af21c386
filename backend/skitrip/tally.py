from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .schemas import VoteGroup, VoteParticipant, VoteRecord

NO_HOTEL_LABEL = "no-hotel"
UNKNOWN_DESTINATION_NAME = "Unknown Destination"


def group_key(destination_id: str, hotel_id: Optional[str]) -> str:
    return f"{destination_id}:{hotel_id or NO_HOTEL_LABEL}"


def tally_votes(records: Iterable[VoteRecord]) -> List[VoteGroup]:
    """Group votes by destination and hotel, most popular first.

    Buckets are keyed on the (destination_id, hotel_id) pair, so a vote with
    no hotel never shares a bucket with a hotel whose id happens to be
    "no-hotel". Participants keep the order they were first seen in, and
    groups with the same count keep the order their first vote appeared in.
    """
    buckets: Dict[Tuple[str, Optional[str]], VoteGroup] = {}
    for record in records:
        hotel_id = record.hotel_id or None
        identity = (record.destination_id, hotel_id)
        bucket = buckets.get(identity)
        if bucket is None:
            bucket = VoteGroup(
                key=group_key(record.destination_id, hotel_id),
                destination_id=record.destination_id,
                destination_name=record.destination_name or UNKNOWN_DESTINATION_NAME,
                hotel_id=hotel_id,
                hotel_name=record.hotel_name or None,
                count=0,
                participants=[],
            )
            buckets[identity] = bucket
        bucket.count += 1
        bucket.participants.append(VoteParticipant(id=record.participant_id, name=record.participant_name))

    return sorted(buckets.values(), key=lambda group: group.count, reverse=True)
