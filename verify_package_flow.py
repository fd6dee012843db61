
import requests
import json
import sys

BASE_URL = "http://localhost:8000/api"

def run_test(destination_id: str):
    resp = requests.post(f"{BASE_URL}/modal", json={"destination_id": destination_id})
    modal_id = resp.json()["modal_id"]

    fields = {
        "title": "Coastal Escape",
        "description": "Three easy days along the coast",
        "duration": "3",
        "price": "499.00",
        "main_image_url": "https://example.com/coast.jpg"
    }
    requests.put(f"{BASE_URL}/modal/{modal_id}/fields", json=fields)

    days = ["Arrival and beach walk", "Boat tour", "Market and departure"]
    for index, text in enumerate(days):
        requests.put(f"{BASE_URL}/modal/{modal_id}/itinerary/{index}", json={"description": text})

    resp = requests.post(f"{BASE_URL}/modal/{modal_id}/submit")

    if resp.status_code == 200:
        data = resp.json()
        if data["success"]:
            print(json.dumps(data["package"], indent=2))
        else:
            print("Form error:", data["form"]["error"])
    else:
        print("Error:", resp.text)

if __name__ == "__main__":
    run_test(sys.argv[1] if len(sys.argv) > 1 else "")
