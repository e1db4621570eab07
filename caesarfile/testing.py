# caesarfile/testing.py
"""Smoke test against a running API: encrypt a file, decrypt it back, compare.

  uvicorn caesarfile.main:app
  python -m caesarfile.testing some/file.bin 42
"""
import os, sys, pathlib, mimetypes
import requests
from typing import Iterable, Optional
from caesarfile.utils import settings

BASE_URL = settings.BASE_URL
MESSAGE = "Hello from caesarfile!"
KEY = 42
TIMEOUT = 60

def _human(n: int) -> str:
    for u in ("B","KB","MB","GB"):
        if n < 1024: return f"{n:.0f}{u}"
        n /= 1024
    return f"{n:.1f}TB"

def health_check(base_url: str = BASE_URL) -> bool:
    try:
        r = requests.get(f"{base_url}/api/health", timeout=10)
        return r.status_code == 200
    except requests.RequestException:
        return False

def transform(base_url: str, mode: str, name: str, data: bytes, key: int) -> dict:
    mime = mimetypes.guess_type(name)[0] or "application/octet-stream"
    files = {"file": (name, data, mime)}
    r = requests.post(f"{base_url}/api/{mode}", files=files, data={"key": str(key)}, timeout=TIMEOUT)
    if r.status_code != 200:
        raise RuntimeError(f"{mode} failed: {r.status_code} {r.text}")
    resp = r.json()
    if not resp.get("success"):
        raise RuntimeError(f"{mode} not successful: {resp}")
    return resp

def download(url: str) -> bytes:
    r = requests.get(url, timeout=TIMEOUT)
    if r.status_code != 200:
        raise RuntimeError(f"download failed: {r.status_code} {r.text}")
    return r.content

def round_trip(base_url: str, name: str, data: bytes, key: int) -> bytes:
    enc = transform(base_url, "encrypt", name, data, key)
    encrypted = download(enc["downloadUrl"])
    print(f"Encrypt OK | {enc['fileName']} {_human(len(encrypted))} | normalized key={enc['normalizedKey']}")
    if len(encrypted) != len(data):
        raise RuntimeError(f"length changed: {len(data)} -> {len(encrypted)}")

    dec = transform(base_url, "decrypt", enc["fileName"], encrypted, key)
    decrypted = download(dec["downloadUrl"])
    print(f"Decrypt OK | {dec['fileName']} {_human(len(decrypted))}")
    return decrypted

def main(argv: Optional[Iterable[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and not os.path.isfile(args[0]):
        print(f"Not a file: {args[0]}"); return 1
    try:
        key = int(args[1]) if len(args) > 1 else KEY
    except ValueError:
        print(f"Invalid key '{args[1]}', key must be an integer"); return 1

    if args:
        path = pathlib.Path(args[0])
        name, data = path.name, path.read_bytes()
    else:
        name, data = "message.txt", MESSAGE.encode("utf-8")

    if not health_check(BASE_URL):
        print(f"Server not ready at {BASE_URL}/api/health"); return 1

    try:
        result = round_trip(BASE_URL, name, data, key)
    except (RuntimeError, requests.RequestException) as e:
        print(e); return 1
    if result != data:
        print("Round trip mismatch!"); return 1
    print(f"Round trip OK ({_human(len(data))}, key={key})")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
