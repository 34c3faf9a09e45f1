from rolepermissions.roles import AbstractUserRole


class Admin(AbstractUserRole):
    role_name = 'admin'
    available_permissions = {
        'view_employees': True,
        'manage_employees': True,
        'manage_employments': True,
        'view_deductions': True,
        'view_payroll': True,
        'approve_payroll': True,
        'view_messages': True,
    }


class Manager(AbstractUserRole):
    role_name = 'manager'
    available_permissions = {
        'view_employees': True,
        'manage_employees': True,
        'create_employees': True,
        'manage_employments': True,
        'view_deductions': True,
        'manage_deductions': True,
        'view_payroll': True,
        'generate_payroll': True,
        'view_messages': True,
    }


class Employee(AbstractUserRole):
    role_name = 'employee'
    available_permissions = {
        'view_own_employee_record': True,
        'view_own_employment': True,
        'view_own_payslips': True,
        'view_own_messages': True,
    }


ROLE_NAMES = (Employee.role_name, Manager.role_name, Admin.role_name)
