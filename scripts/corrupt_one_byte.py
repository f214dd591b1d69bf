import sys
from pathlib import Path

def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: corrupt_one_byte.py <file> [offset]")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 64:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Default: flip a bit inside the first Mii record after the RNOD magic.
    # The record region is covered by the CRC16, so the checksum no longer matches.
    idx = int(sys.argv[2], 0) if len(sys.argv) == 3 else 4 + 8
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
