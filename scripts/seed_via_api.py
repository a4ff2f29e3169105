import subprocess
import time
import json
import os
import signal
import requests
import random
from faker import Faker

# --- Configuration ---
BASE_URL = "http://127.0.0.1:8000/v1"
UVICORN_COMMAND = ["uvicorn", "fin_api.main:app"]
SEED_EMAIL = os.environ.get("SEED_EMAIL", "testuser@example.com")
SEED_PASSWORD = os.environ.get("SEED_PASSWORD", "aStrongPassword123")

fake = Faker()


# --- Helper Function for API Requests ---
def run_api_request(method: str, endpoint: str, data: dict = None, token: str = None, params: dict = None):
    """Makes an API request and returns the JSON response."""
    url = f"{BASE_URL}{endpoint}"
    headers = {}
    if data is not None:
        headers["Content-Type"] = "application/json"
    if token:
        headers["Authorization"] = f"Bearer {token}"
    try:
        json_data = json.dumps(data) if data is not None else None
        response = requests.request(method, url, data=json_data, headers=headers, params=params, timeout=10)
        response.raise_for_status()
        if not response.text:
            return None
        return response.json()
    except requests.exceptions.HTTPError as e:
        print(f"Error: HTTP {e.response.status_code} for {url}\nResponse: {e.response.text}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"An unexpected error occurred: {e}")
        return None


def ensure_user() -> str:
    print("--- Ensuring User Exists ---")
    run_api_request("POST", "/register", {"email": SEED_EMAIL, "password": SEED_PASSWORD, "name": fake.name()})
    login = run_api_request("POST", "/login", {"email": SEED_EMAIL, "password": SEED_PASSWORD})
    if not login:
        raise SystemExit("Could not log in as the seed user")
    return login["token"]


def seed_accounts(token: str) -> list:
    print("--- Seeding Accounts ---")
    account_types = [("bank", "Main Checking"), ("bank", "Emergency Fund"), ("cash", "Wallet"), ("e-wallet", "Payments App")]
    accounts = []
    for account_type, name in account_types:
        account = run_api_request("POST", "/account", {
            "name": name, "type": account_type, "description": fake.sentence(),
        }, token=token)
        if account:
            accounts.append(account)
    return accounts


def seed_transactions(token: str, accounts: list) -> list:
    print("--- Seeding Transactions ---")
    transactions = []
    if not accounts:
        return transactions
    for _ in range(200):
        trans = run_api_request("POST", "/transaction", {
            "name": fake.bs(),
            "type": "out" if random.random() > 0.4 else "in",
            "description": fake.company(),
            "amount": round(random.uniform(1, 800), 2),
            "accountId": random.choice(accounts)["id"],
        }, token=token)
        if trans:
            transactions.append(trans)
    return transactions


def main():
    server_process = subprocess.Popen(UVICORN_COMMAND)
    time.sleep(5)
    print(f"Server started with PID: {server_process.pid}")

    try:
        token = ensure_user()
        accounts = seed_accounts(token)
        seed_transactions(token, accounts)

        listing = run_api_request("GET", "/transaction", token=token, params={"limit": 5, "offset": 0})
        if listing:
            print(f"Seeded transactions total: {listing['total']}")
        print("\n--- Seeding Complete ---")

    finally:
        if server_process:
            print("\n--- Shutting down server ---")
            os.kill(server_process.pid, signal.SIGTERM)
            server_process.wait()
            print("Server shut down.")


if __name__ == "__main__":
    main()
