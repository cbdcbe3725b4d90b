"""Manual activation payments.

A user pays out of band and files a pending payment; an admin confirms it,
which unlocks match creation for that user.
"""

from flask import current_app

from scoreboard import db
from scoreboard.errors import NotFound, ValidationError
from scoreboard.models import Payment, User


def create_payment(user: User, payment_method=None, transaction_id=None) -> Payment:
    payment = Payment(
        user_id=user.id,
        amount=int(current_app.config.get('PAYMENT_AMOUNT', 100)),
        status='pending',
        payment_method=payment_method,
        transaction_id=transaction_id,
    )
    db.session.add(payment)
    db.session.commit()
    current_app.logger.info(f"[payment-create] payment={payment.id} user={user.id} amount={payment.amount}")
    return payment


def list_user_payments(user: User):
    return Payment.query.filter_by(user_id=user.id).order_by(Payment.created_at.desc(), Payment.id.desc()).all()


def list_all_payments():
    return Payment.query.order_by(Payment.created_at.desc(), Payment.id.desc()).all()


def _get_payment(payment_id: int) -> Payment:
    payment = db.session.get(Payment, payment_id)
    if payment is None:
        raise NotFound('Payment not found')
    return payment


def confirm_payment(payment_id: int, admin_email: str) -> Payment:
    payment = _get_payment(payment_id)
    payment.status = 'confirmed'
    payment.reviewed_by = admin_email
    payment.user.is_payment_confirmed = True
    db.session.commit()
    current_app.logger.info(f"[payment-confirm] payment={payment.id} user={payment.user_id} by={admin_email}")
    return payment


def reject_payment(payment_id: int, admin_email: str) -> Payment:
    payment = _get_payment(payment_id)
    if payment.status == 'confirmed':
        raise ValidationError('Payment is already confirmed')
    payment.status = 'rejected'
    payment.reviewed_by = admin_email
    db.session.commit()
    current_app.logger.info(f"[payment-reject] payment={payment.id} user={payment.user_id} by={admin_email}")
    return payment


def set_user_activation(user_id: int, activate: bool) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    user.is_payment_confirmed = bool(activate)
    db.session.commit()
    current_app.logger.info(f"[user-toggle] user={user.id} active={user.is_payment_confirmed}")
    return user
