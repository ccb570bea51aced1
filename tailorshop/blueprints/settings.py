from datetime import datetime
from zoneinfo import ZoneInfo

from flask import Blueprint, Response, current_app, jsonify, request

from tailorshop.exceptions import BusinessLogicError
from tailorshop.middleware import get_store, json_body, require_login
from tailorshop.models import Language, ShopInfo, Theme
from tailorshop.services import backup_service, garment_service
from tailorshop.store.actions import SetLanguage, SetTheme, UpdateShopInfo

settings_bp = Blueprint('settings', __name__, url_prefix='/settings')


def _settings_view(state) -> dict:
    return {
        'shopInfo': state.shop_info.to_dict(),
        'language': state.language.value,
        'theme': state.theme.value,
        'garmentTypes': [g.to_dict() for g in state.garment_types],
    }


@settings_bp.route('/', methods=['GET'])
@require_login
def index():
    return jsonify(_settings_view(get_store().state))


@settings_bp.route('/shop-info', methods=['PUT'])
@require_login
def update_shop_info():
    """Name, address and phone are required; tagline is optional."""
    data = json_body()
    fields = {key: (data.get(key) or '').strip() for key in ('name', 'tagline', 'address', 'phone')}
    missing = [key for key in ('name', 'address', 'phone') if not fields[key]]
    if missing:
        raise BusinessLogicError(f"Required: {', '.join(missing)}")

    store = get_store()
    store.dispatch(UpdateShopInfo(payload=ShopInfo(**fields)))
    current_app.logger.info(f"Shop info updated: {fields['name']}")
    return jsonify(_settings_view(store.state))


@settings_bp.route('/language', methods=['PUT'])
@require_login
def set_language():
    try:
        language = Language(json_body().get('language'))
    except ValueError:
        raise BusinessLogicError('Language must be one of: en, hi, mr.')
    store = get_store()
    store.dispatch(SetLanguage(payload=language))
    return jsonify(_settings_view(store.state))


@settings_bp.route('/theme', methods=['PUT'])
@require_login
def set_theme():
    try:
        theme = Theme(json_body().get('theme'))
    except ValueError:
        raise BusinessLogicError('Theme must be light or dark.')
    store = get_store()
    store.dispatch(SetTheme(payload=theme))
    return jsonify(_settings_view(store.state))


@settings_bp.route('/garment-types', methods=['GET'])
@require_login
def list_garment_types():
    return jsonify({'garmentTypes': [g.to_dict() for g in get_store().state.garment_types]})


@settings_bp.route('/garment-types', methods=['POST'])
@require_login
def add_garment_type():
    """``fields`` may be a list or a comma separated string."""
    data = json_body()
    fields = data.get('fields') or []
    if isinstance(fields, str):
        fields = garment_service.parse_fields(fields)

    added = garment_service.add_garment_type(get_store(), data.get('name'), fields)
    return jsonify({'added': added}), (201 if added else 200)


@settings_bp.route('/export', methods=['GET'])
@require_login
def export_data():
    """Download all data as a JSON backup file."""
    today = datetime.now(ZoneInfo(current_app.config.get('SHOP_TIMEZONE', 'Asia/Kolkata'))).date()
    filename = backup_service.backup_filename(current_app.config.get('BACKUP_FILE_PREFIX', 'deepak-tailor'), today)
    return Response(
        backup_service.export_backup(get_store().state),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


@settings_bp.route('/import', methods=['POST'])
@require_login
def import_data():
    """Restore from a backup sent as a ``file`` upload or as the raw request body."""
    upload = request.files.get('file')
    text = upload.read().decode('utf-8', errors='replace') if upload else request.get_data(as_text=True)

    state = backup_service.import_backup(get_store(), text)
    return jsonify({
        'status': 'ok',
        'message': 'Data restored successfully!',
        'customers': len(state.customers),
        'orders': len(state.orders),
    })
