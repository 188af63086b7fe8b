#!/usr/bin/env python3
"""
Live endpoint checks for a running storefront stack
Hits every service directly and through the gateway

Usage:
    docker compose up -d --build
    python check_endpoints.py
    python check_endpoints.py --outage    # also stops/starts user-service
"""

import argparse
import json
import subprocess
import sys
import time
from datetime import datetime
from typing import Any, Optional

import requests

# Configuration
BASE_URLS = {
    "user": "http://localhost:3000",
    "product": "http://localhost:3001",
    "order": "http://localhost:3002",
    "gateway": "http://localhost:3003",
}

EXPECTED_USERS = [{"id": 1, "name": "John Doe"}, {"id": 2, "name": "Jane Smith"}]
GATEWAY_ERRORS = (502, 503)


class EndpointTester:
    def __init__(self, timeout: float = 10.0):
        self.session = requests.Session()
        self.timeout = timeout
        self.test_results = []

    def log_test(self, service: str, endpoint: str, status_code: int, success: bool, response_data: Any = None, error: str = None, elapsed: float = 0.0):
        """Log test result"""
        result = {
            "timestamp": datetime.now().isoformat(),
            "service": service,
            "endpoint": endpoint,
            "status_code": status_code,
            "success": success,
            "elapsed": round(elapsed, 3),
            "response_data": response_data,
            "error": error
        }
        self.test_results.append(result)

        status = "PASS" if success else "FAIL"
        print(f"{status} {service.upper()} GET {endpoint} - {status_code} ({elapsed:.2f}s)")
        if error:
            print(f"   Error: {error}")

    def check(self, service: str, endpoint: str, expected_status=200, expected_body: Any = None) -> Optional[requests.Response]:
        """GET an endpoint and compare status (and body, when given)"""
        url = f"{BASE_URLS[service]}{endpoint}"
        expected = expected_status if isinstance(expected_status, tuple) else (expected_status,)
        started = time.monotonic()

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            self.log_test(service, endpoint, 0, False, error=str(e), elapsed=time.monotonic() - started)
            return None

        elapsed = time.monotonic() - started
        try:
            response_data = response.json()
        except ValueError:
            response_data = response.text

        success = response.status_code in expected
        error = None
        if success and expected_body is not None and response_data != expected_body:
            success = False
            error = f"unexpected body: {response_data!r}"

        self.log_test(service, endpoint, response.status_code, success, response_data, error, elapsed)
        return response

    def test_health(self):
        """Every service answers /health on its own"""
        print("\nChecking health endpoints...")
        for service, name in (("user", "User"), ("product", "Product"), ("order", "Order"), ("gateway", "Gateway")):
            self.check(service, "/health", 200, {"status": f"{name} Service is healthy"})

    def test_gateway(self):
        """Resources through the gateway match the backends"""
        print("\nChecking gateway forwarding...")
        self.check("gateway", "/api/users", 200, EXPECTED_USERS)
        for resource in ("users", "products", "orders"):
            direct = self.check(resource[:-1], f"/{resource}")
            expected_body = direct.json() if direct is not None and direct.ok else None
            self.check("gateway", f"/api/{resource}", 200, expected_body)
        self.check("gateway", "/api/unknownthing", 404)
        self.check("gateway", "/health/upstreams", 200)

    def test_outage(self, compose: str, upstream_timeout: float):
        """Stop user-service, expect 502/503 in time, restart, expect recovery"""
        print("\nChecking user-service outage...")
        subprocess.run([*compose.split(), "stop", "user-service"], check=True)
        try:
            response = self.check("gateway", "/api/users", GATEWAY_ERRORS)
            if response is not None and response.elapsed.total_seconds() > upstream_timeout + 1:
                self.log_test("gateway", "/api/users", response.status_code, False,
                              error=f"took {response.elapsed.total_seconds():.2f}s")
        finally:
            subprocess.run([*compose.split(), "start", "user-service"], check=True)

        deadline = time.monotonic() + 30
        while time.monotonic() < deadline:
            try:
                if self.session.get(f"{BASE_URLS['user']}/health", timeout=2).ok:
                    break
            except requests.RequestException:
                pass
            time.sleep(1)
        self.check("gateway", "/api/users", 200, EXPECTED_USERS)

    def run_all_tests(self, outage: bool, compose: str, upstream_timeout: float, results_file: str) -> bool:
        """Run all endpoint tests"""
        print("Starting storefront endpoint checks...")

        self.test_health()
        self.test_gateway()
        if outage:
            self.test_outage(compose, upstream_timeout)

        # Summary
        total_tests = len(self.test_results)
        passed_tests = sum(1 for result in self.test_results if result["success"])
        failed_tests = total_tests - passed_tests

        print("\nSummary:")
        print(f"   Total: {total_tests}")
        print(f"   Passed: {passed_tests}")
        print(f"   Failed: {failed_tests}")

        with open(results_file, "w") as f:
            json.dump(self.test_results, f, indent=2)
        print(f"\nDetailed results saved to {results_file}")

        return failed_tests == 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a running storefront stack")
    parser.add_argument("--outage", action="store_true", help="stop and restart user-service during the run")
    parser.add_argument("--compose", default="docker compose", help="compose command (default: 'docker compose')")
    parser.add_argument("--upstream-timeout", type=float, default=5.0, help="gateway UPSTREAM_TIMEOUT in seconds")
    parser.add_argument("--results", default="endpoint_results.json", help="where to write the JSON report")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    tester = EndpointTester(timeout=args.upstream_timeout + 5)
    ok = tester.run_all_tests(args.outage, args.compose, args.upstream_timeout, args.results)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
