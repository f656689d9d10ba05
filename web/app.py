"""Flask web application exposing one in-memory parking lot as a JSON API."""

import os
from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from parking.loader import load_lot
from parking.lot import ParkingLot
from parking.results import CheckInResult, CheckOutResult
from parking.vehicle import Vehicle
from parking.vehicle_type import VehicleType

app = Flask(__name__)


def create_lot() -> ParkingLot:
    """Build the lot from PARKING_LOT_FILE if set, otherwise use defaults."""
    lot_file = os.environ.get("PARKING_LOT_FILE")
    if lot_file:
        return load_lot(lot_file)
    return ParkingLot()


# State lives only as long as the process
lot = create_lot()


def check_in_json(result: CheckInResult) -> dict:
    data = {"plate": result.plate, "admitted": result.admitted}
    if result.admitted:
        data["alreadyParked"] = result.already_parked
    return data


def check_out_json(result: CheckOutResult) -> dict:
    data = {"plate": result.plate, "found": result.found}
    if result.found:
        data["fee"] = result.fee
        data["parkedMinutes"] = result.parked_minutes
    return data


@app.errorhandler(ValueError)
def bad_request(error):
    app.logger.warning("Bad request: %s", error)
    return jsonify({"error": str(error)}), 400


@app.route("/")
def index():
    """Lot summary."""
    return jsonify({
        "name": lot.name,
        "capacity": lot.capacity,
        "occupancy": lot.occupancy,
        "available": lot.available_spaces,
    })


@app.route("/check-in", methods=["POST"])
def check_in():
    """Admit a vehicle described by the JSON body."""
    payload = request.get_json(silent=True) or {}

    plate = str(payload.get("plate") or "").strip()
    if not plate:
        raise ValueError("Missing plate")
    type_name = payload.get("type")
    if not type_name:
        raise ValueError("Missing vehicle type")

    vehicle = Vehicle(
        plate,
        VehicleType.from_name(type_name),
        discount_card=payload.get("discountCard"),
        check_in_time=lot.clock(),
    )
    result = lot.check_in(vehicle)
    if not result.admitted:
        app.logger.info("Check-in rejected for %s", plate)
        return jsonify(check_in_json(result)), 409
    return jsonify(check_in_json(result)), 201


@app.route("/check-out/<plate>", methods=["POST"])
def check_out(plate: str):
    """Check out a vehicle by plate and return the fee."""
    result = lot.check_out(plate)
    if not result.found:
        return jsonify(check_out_json(result)), 404
    return jsonify(check_out_json(result))


@app.route("/account")
def account():
    """Completed check-outs and total earnings."""
    totals = lot.show_account()
    return jsonify({
        "completedCheckouts": totals.completed_checkouts,
        "totalEarnings": totals.total_earnings,
        "summary": totals.summary,
    })


@app.route("/vehicles")
def vehicles():
    """Plates currently parked."""
    return jsonify({"plates": lot.list_vehicles()})


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
