from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from scoreboard.api import json_body
from scoreboard.services.payments import create_payment, list_user_payments

payments = Blueprint('payments', __name__)


@payments.route('', methods=['POST'])
@login_required
def create():
    data = json_body()
    payment = create_payment(current_user, data.get('payment_method'), data.get('transaction_id'))
    return jsonify({'success': True, 'data': payment.to_dict()}), 201


@payments.route('/my', methods=['GET'])
@login_required
def mine():
    return jsonify({'success': True, 'data': [p.to_dict() for p in list_user_payments(current_user)]})
