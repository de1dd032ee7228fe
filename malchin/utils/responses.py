"""JSON response helpers."""

from flask import jsonify


def success(status=200, **data):
    return jsonify({'success': True, **data}), status


def failure(message, status=400, **data):
    return jsonify({'success': False, 'message': message, **data}), status


def form_failure(form):
    return failure('Please correct the errors below.', 400, errors=form.errors)


def paginated(pagination, serialize):
    return {
        'items': [serialize(item) for item in pagination.items],
        'page': pagination.page,
        'pages': pagination.pages,
        'total': pagination.total,
        'hasNext': pagination.has_next,
    }
