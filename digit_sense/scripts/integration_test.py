"""
Integration test script: hits the game endpoints of a running server.

Usage:
    # Offline (mock vision):
    VISION_ADAPTER=mock uvicorn digit_sense.web.app:app --port 8000
    python digit_sense/scripts/integration_test.py
"""

import sys
import httpx

BASE = "http://localhost:8000"
TIMEOUT = 60.0
# 1x1 white PNG
PIXEL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PchI7wAAAABJRU5ErkJggg=="
)
passed = 0
failed = 0


def test(name: str, method: str, path: str, body: dict | None = None, checks: dict | None = None):
    global passed, failed
    url = f"{BASE}{path}"
    checks = checks or {}
    try:
        if method == "GET":
            r = httpx.get(url, timeout=TIMEOUT)
        else:
            r = httpx.post(url, json=body or {}, timeout=TIMEOUT)

        if r.status_code != 200:
            print(f"  FAIL  {name} — HTTP {r.status_code}")
            failed += 1
            return

        data = r.json()
        for key, expected in checks.items():
            actual = data.get(key)
            if actual != expected:
                print(f"  FAIL  {name} — {key}: expected {expected!r}, got {actual!r}")
                failed += 1
                return

        print(f"  OK    {name}")
        passed += 1

    except httpx.ConnectError:
        print(f"  FAIL  {name} — connection refused (is the server running?)")
        failed += 1
    except Exception as e:
        print(f"  FAIL  {name} — {type(e).__name__}: {e}")
        failed += 1


def main():
    print(f"\nIntegration tests against {BASE}\n")
    print("--- Health & Status ---")
    test("GET /health", "GET", "/health", None, {"api": True})
    test("GET /status", "GET", "/status")

    print("\n--- Round ---")
    test("POST /round/start", "POST", "/round/start", None,
         {"status": "playing", "wrong_guesses": 0, "hints": []})
    test("GET /round", "GET", "/round", None, {"status": "playing"})

    print("\n--- Guessing ---")
    test("POST /guess (empty canvas)", "POST", "/guess",
         {"image": "data:,"},
         {"ok": False, "error_code": "EMPTY_INPUT"})
    test("POST /guess (malformed)", "POST", "/guess",
         {"image": "not-a-data-url"},
         {"ok": False, "error_code": "INVALID_INPUT"})
    test("POST /guess (drawing)", "POST", "/guess",
         {"image": PIXEL},
         {"ok": True})

    print("\n--- Modes ---")
    test("POST /mode gesture", "POST", "/mode", {"mode": "gesture"}, {"ok": True, "mode": "gesture"})
    test("POST /mode draw", "POST", "/mode", {"mode": "draw"}, {"ok": True, "mode": "draw"})
    test("POST /canvas/clear", "POST", "/canvas/clear", None, {"ok": True})

    print("\n--- Final Status ---")
    test("GET /status (final)", "GET", "/status")

    total = passed + failed
    print(f"\n{'='*40}")
    print(f"  {passed}/{total} passed, {failed} failed")
    print(f"{'='*40}\n")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
