import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers
from rolepermissions.exceptions import RoleDoesNotExist
from rolepermissions.roles import assign_role, remove_role, get_user_roles
from employee_payroll.common.exceptions import Conflict
from employee_payroll.users.roles.base_roles import Employee as EmployeeRole

logger = logging.getLogger(__name__)
User = get_user_model()


class UserService:

    @staticmethod
    def get_role_names(user):
        if user.is_superuser:
            return ['admin']
        return sorted(role.get_name() for role in get_user_roles(user))

    @staticmethod
    def create_user(*, email, password):
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict(f"User with email {email} already exists.")
        user = User.objects.create_user(email=email, password=password)
        logger.info(f"User created: {user.email}")
        return user

    @staticmethod
    def update_credentials(user, *, email=None, password=None):
        if email and email.lower() != user.email.lower():
            if User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
                raise Conflict(f"Email {email} is already taken.")
            user.email = email
        if password:
            user.set_password(password)
        user.save()
        return user

    @staticmethod
    @transaction.atomic
    def assign_roles(user, roles):
        """Replace every role held by ``user`` with ``roles`` (defaults to employee)."""
        roles = list(roles or [EmployeeRole.role_name])

        for current_role in [r.get_name() for r in get_user_roles(user)]:
            remove_role(user, current_role)

        for role in roles:
            try:
                assign_role(user, role)
            except RoleDoesNotExist:
                logger.error(f"Role {role} does not exist for {user.email}")
                raise serializers.ValidationError({"roles": f"Role {role} does not exist."})

        logger.info(f"Roles {roles} assigned to {user.email}")
        return user
