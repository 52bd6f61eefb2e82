"""Flask application with route handlers"""
import os
from flask import Flask, jsonify, request
from flask_cors import CORS

from config.settings import CORS_ORIGINS, SUBMIT_TIMEOUT
from utils.validation import sanitize_string
from utils.logger import log_info, mask_email
from utils.rate_limit import init_rate_limiter, RATE_LIMITS
from services import waitlist_service
from services.waitlist_controller import SubmissionError, SubmissionStatus, WaitlistSubmissionController

app = Flask(__name__)
CORS(app, resources={
    r"/api/*": {
        "origins": CORS_ORIGINS,
        "methods": ["POST", "OPTIONS"],
        "allow_headers": ["Content-Type"],
    }
})

# Initialize rate limiter
limiter = init_rate_limiter(app)

# Status code for each way a submission can end
ERROR_STATUS_CODES = {
    SubmissionError.EMPTY_EMAIL: 400,
    SubmissionError.INVALID_FORMAT: 400,
    SubmissionError.DUPLICATE_EMAIL: 409,
    SubmissionError.GENERIC: 503,
}

@app.route('/')
def home():
    return jsonify({
        "message": "R&D Agent Store Waitlist API",
        "status": "running",
        "version": "1.0.0"
    })

@app.route('/health')
@limiter.exempt
def health_check():
    return jsonify({
        "status": "healthy",
        "message": "API is running successfully"
    })

@app.route('/api/waitlist', methods=['POST'])
@limiter.limit(RATE_LIMITS['waitlist'])
async def join_waitlist():
    """Add email to waitlist"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    email = sanitize_string(data.get('email')) or ''

    controller = WaitlistSubmissionController(waitlist_service.add_to_waitlist, timeout=SUBMIT_TIMEOUT)
    controller.update_email(email)
    state = await controller.submit()

    if state.status is SubmissionStatus.SUCCESS:
        log_info(f"Waitlist signup accepted for {mask_email(state.email)}")
        return jsonify(state.to_dict()), 201
    return jsonify(state.to_dict()), ERROR_STATUS_CODES.get(state.error_kind, 500)

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'
    app.run(host='0.0.0.0', port=port, debug=debug)
