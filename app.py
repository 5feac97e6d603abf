from flask import Flask, request, send_file, jsonify
from flask_cors import CORS
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from passlib.hash import pbkdf2_sha256
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
import os
import base64
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, date
from flask.json.provider import DefaultJSONProvider
from bson import ObjectId
from bson.errors import InvalidId
from io import BytesIO
from dotenv import load_dotenv

from health_pdf import build_fitness_report, build_health_summary, summarize_fitness

# Load environment variables
load_dotenv()

# Initialize Flask app
app = Flask(__name__)
app.secret_key = os.getenv('SECRET_KEY', 'dev-secret-change-me')
app.config['MONGO_URI'] = os.getenv('MONGO_URI')
app.config['MONGO_DB_NAME'] = os.getenv('MONGO_DB_NAME', 'health_record')
app.config['TOKEN_MAX_AGE'] = int(os.getenv('TOKEN_MAX_AGE', 60 * 60 * 24))
app.config['EXPORT_FETCH_WORKERS'] = int(os.getenv('EXPORT_FETCH_WORKERS', 5))
app.logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

class MongoJSONProvider(DefaultJSONProvider):
    def default(self, o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)

app.json = MongoJSONProvider(app)

# Pre-flight requests are answered before any view runs
CORS(
    app,
    resources={r"/export/*": {"origins": "*"}, r"/api/*": {"origins": "*"}},
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    send_wildcard=True,
)

# Database setup
client = MongoClient(app.config['MONGO_URI'])
db = client[app.config['MONGO_DB_NAME']]

# Collections
users = db.users
col_profiles = db.profiles
col_medical_reports = db.medical_reports
col_doctor_visits = db.doctor_visits
col_medications = db.medications
col_vaccinations = db.vaccinations
col_fitness_logs = db.fitness_logs

DATE_FORMAT = '%Y-%m-%d'


# Errors
class ExportError(Exception):
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {'error': self.message}
        if self.details is not None:
            body['details'] = self.details
        return body


class AuthError(ExportError):
    status_code = 401


class FetchError(ExportError):
    status_code = 500


class ValidationError(ExportError):
    status_code = 400


# Service Classes
class UserService:
    @staticmethod
    def get_by_id(user_id):
        return users.find_one({"_id": ObjectId(user_id)})

    @staticmethod
    def get_by_email(email):
        return users.find_one({"email": email})


class ProfileService:
    @staticmethod
    def get(user_id):
        return col_profiles.find_one({"user_id": ObjectId(user_id)})


class MedicalReportService:
    @staticmethod
    def get_all(user_id):
        return list(col_medical_reports.find({"user_id": ObjectId(user_id)}).sort("report_date", -1))


class DoctorVisitService:
    @staticmethod
    def get_all(user_id):
        return list(col_doctor_visits.find({"user_id": ObjectId(user_id)}).sort("visit_date", -1))


class MedicationService:
    @staticmethod
    def get_all(user_id):
        return list(col_medications.find({"user_id": ObjectId(user_id)}).sort("start_date", -1))


class VaccinationService:
    @staticmethod
    def get_all(user_id):
        return list(col_vaccinations.find({"user_id": ObjectId(user_id)}).sort("date_taken", -1))


class FitnessLogService:
    @staticmethod
    def get_range(user_id, start_date, end_date):
        return list(col_fitness_logs.find({
            "user_id": ObjectId(user_id),
            "date": {"$gte": start_date, "$lte": end_date}
        }).sort("date", 1))


# Bearer tokens
def _token_serializer():
    return URLSafeTimedSerializer(app.secret_key, salt='api-token')


def issue_api_token(user_id):
    return _token_serializer().dumps({'user_id': str(user_id)})


def verify_api_token(token):
    try:
        data = _token_serializer().loads(token, max_age=app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        raise AuthError('Token expired')
    except BadSignature:
        raise AuthError('Unauthorized')
    return data['user_id']


def authenticate_request():
    """Resolve the bearer credential on the current request to a user document"""
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        raise AuthError('No authorization header')

    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise AuthError('Unauthorized')

    user_id = verify_api_token(token.strip())
    try:
        user = UserService.get_by_id(user_id)
    except InvalidId:
        user = None
    if not user:
        raise AuthError('Unauthorized')
    return user


def parse_date(value, field):
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")


# Export orchestration
def fetch_all(queries):
    """Run independent reads in parallel and wait for all of them.

    ``queries`` maps a result name to a zero-argument callable. The first
    failing read aborts the export.
    """
    workers = min(app.config['EXPORT_FETCH_WORKERS'], len(queries)) or 1
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {name: executor.submit(query) for name, query in queries.items()}
        try:
            return {name: future.result() for name, future in futures.items()}
        except PyMongoError as e:
            raise FetchError('Failed to fetch health records', details=str(e))


def generate_health_summary(user):
    user_id = user['_id']
    records = fetch_all({
        'profile': lambda: ProfileService.get(user_id),
        'reports': lambda: MedicalReportService.get_all(user_id),
        'visits': lambda: DoctorVisitService.get_all(user_id),
        'medications': lambda: MedicationService.get_all(user_id),
        'vaccinations': lambda: VaccinationService.get_all(user_id),
    })

    app.logger.info(
        "Fetched data for %s: profile=%s reports=%d visits=%d medications=%d vaccinations=%d",
        user_id, bool(records['profile']), len(records['reports']), len(records['visits']),
        len(records['medications']), len(records['vaccinations'])
    )

    return build_health_summary(
        records['profile'],
        records['reports'],
        records['visits'],
        records['medications'],
        records['vaccinations'],
        email=user.get('email', ''),
    )


def generate_fitness_report(user, start_date, end_date):
    user_id = user['_id']
    records = fetch_all({
        'profile': lambda: ProfileService.get(user_id),
        'logs': lambda: FitnessLogService.get_range(user_id, start_date, end_date),
    })

    logs = records['logs']
    summary = summarize_fitness(logs)
    app.logger.info("Fetched %d fitness logs for %s", len(logs), user_id)

    return build_fitness_report(records['profile'], logs, summary, start_date, end_date)


def error_response(error):
    return jsonify(error.to_dict()), error.status_code


# Auth Routes
@app.route('/api/auth/token', methods=['POST'])
def api_auth_token():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip()
    password = (data.get('password') or '').strip()

    user = UserService.get_by_email(email) if email else None
    if user and password and pbkdf2_sha256.verify(password, user['password']):
        return jsonify({'token': issue_api_token(user['_id'])})

    return jsonify({'error': 'Invalid credentials'}), 401


# PDF Export Routes
@app.route('/export/health-summary', methods=['GET', 'POST'])
def export_health_summary():
    try:
        user = authenticate_request()
        app.logger.info("Generating health summary PDF for user %s", user['_id'])
        pdf_bytes = generate_health_summary(user)
    except ExportError as e:
        app.logger.error("Health summary export failed: %s", e)
        return error_response(e)
    except Exception as e:
        app.logger.exception("Error generating health summary PDF")
        return jsonify({'error': 'Failed to generate PDF', 'details': str(e)}), 500

    return send_file(
        BytesIO(pdf_bytes),
        as_attachment=True,
        download_name=f"health-summary-{date.today().isoformat()}.pdf",
        mimetype='application/pdf'
    )


@app.route('/export/fitness-report', methods=['POST'])
def export_fitness_report():
    try:
        user = authenticate_request()

        data = request.get_json(silent=True) or {}
        start_date = parse_date(data.get('start_date'), 'start_date')
        end_date = parse_date(data.get('end_date'), 'end_date')
        if start_date > end_date:
            raise ValidationError('start_date must not be after end_date')

        app.logger.info("Generating fitness PDF for user %s", user['_id'])
        pdf_bytes = generate_fitness_report(user, start_date, end_date)
    except ExportError as e:
        app.logger.error("Fitness report export failed: %s", e)
        return error_response(e)
    except Exception as e:
        app.logger.exception("Error generating fitness PDF")
        return jsonify({'error': 'Failed to generate PDF', 'details': str(e)}), 500

    return jsonify({
        'pdf': base64.b64encode(pdf_bytes).decode('ascii'),
        'filename': f"fitness-report-{data['start_date']}-to-{data['end_date']}.pdf"
    })


if __name__ == '__main__':
    app.run(debug=os.getenv('FLASK_DEBUG') == '1')
