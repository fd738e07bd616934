"""
Inquiry route.

POST /api/inquiries accepts contact and export inquiries. Submissions are
sent once; on failure the user resubmits.
"""

from flask import Blueprint, current_app, jsonify, request

from core.validation import parse_or_raise
from models.inquiry import InquiryCreate
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

inquiries_bp = Blueprint("inquiries", __name__, url_prefix="/api/inquiries")


@inquiries_bp.route("", methods=["POST"])
def create_inquiry():
    """Validate and store an inquiry; 400 "Invalid inquiry data" on bad payloads."""
    payload = parse_or_raise(InquiryCreate, request.get_json(silent=True), "Invalid inquiry data")
    inquiry = current_app.config["INQUIRY_GATEWAY"].create_inquiry(payload)
    return jsonify(inquiry.to_dict()), 201
