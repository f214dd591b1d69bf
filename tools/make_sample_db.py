import random
from pathlib import Path

from rfl_core.protocol import MII_LEN, MII_SLOTS, NAME_LEN, NAME_OFFSET
from rfl_edit.database import Database

NAMES = ["Mario", "Luigi", "Peach", "Daisy", "Yoshi", "Toad", "Wario", "Zoë", "Ken", "Emma", "Sakura", "Kaito"]

CREATOR_OFFSET = 0x36


def utf16_field(text: str) -> bytes:
    raw = text.encode("utf-16-be")[:NAME_LEN]
    return raw + bytes(NAME_LEN - len(raw))


def random_mii(rng: random.Random, name: str) -> bytes:
    rec = bytearray(MII_LEN)

    # Gender (bit 14), birthday (bits 5..13), favorite color (bits 1..4)
    head = (rng.randint(0, 1) << 14) | (rng.randint(1, 12) << 10) | (rng.randint(1, 31) << 5) | (rng.randint(0, 11) << 1)
    rec[0:2] = head.to_bytes(2, "big")
    rec[NAME_OFFSET:NAME_OFFSET + NAME_LEN] = utf16_field(name)

    # Height / build
    rec[0x16] = rng.randint(0, 127)
    rec[0x17] = rng.randint(0, 127)

    # Mii ID and system ID
    rec[0x18:0x20] = bytes(rng.randrange(256) for _ in range(8))

    # Packed appearance words
    rec[0x20:0x36] = bytes(rng.randrange(256) for _ in range(0x36 - 0x20))

    rec[CREATOR_OFFSET:CREATOR_OFFSET + NAME_LEN] = utf16_field("RFL")
    return bytes(rec)


def generate_database(out_path: str, count: int = 12, seed: int | None = None, gaps: bool = True) -> Path:
    rng = random.Random(seed)
    db = Database.new()

    slots = list(range(MII_SLOTS))
    if gaps:
        slots = sorted(rng.sample(slots, count))
    else:
        slots = slots[:count]

    for i, slot in enumerate(slots):
        db.import_record(slot, random_mii(rng, NAMES[i % len(NAMES)]))

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(db.to_bytes())
    print(f"GENERATED: {out} ({count} Miis in slots {slots})")
    return out


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_sample_db.py OUT [--count N] [--seed S] [--packed]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_value(arg_list: list[str], flag: str) -> tuple[str | None, list[str]]:
        if flag not in arg_list:
            return None, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    packed, args = pop_flag(args, "--packed")
    count, args = pop_value(args, "--count")
    seed, args = pop_value(args, "--seed")

    n = int(count) if count is not None else 12
    if not 0 <= n <= MII_SLOTS:
        raise SystemExit(f"--count must be between 0 and {MII_SLOTS}")

    out = args[0] if len(args) > 0 else "RFL_DB.dat"
    generate_database(out, count=n, seed=int(seed) if seed is not None else None, gaps=not packed)
