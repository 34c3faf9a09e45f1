from decimal import Decimal

import bleach
from rest_framework import serializers
from employee_payroll.payroll.models import Deduction, Payslip
from employee_payroll.payroll.services.deductions import fraction_to_percent, percent_to_fraction
from employee_payroll.payroll.services.periods import MIN_YEAR


class DeductionSerializer(serializers.ModelSerializer):
    """Percentages go over the wire as 0-100 and are stored as fractions."""
    percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100")
    )

    class Meta:
        model = Deduction
        fields = ["id", "code", "name", "percentage"]
        read_only_fields = ["id"]
        # uniqueness is reported as 409 by the service
        extra_kwargs = {
            "code": {"validators": []},
            "name": {"validators": []},
        }

    def validate_code(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Deduction code cannot be blank.")
        return cleaned

    def validate_name(self, value):
        cleaned = bleach.clean(value.strip(), tags=[], strip=True)
        if not cleaned:
            raise serializers.ValidationError("Deduction name cannot be blank.")
        return cleaned

    def validate_percentage(self, value):
        return percent_to_fraction(value)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["percentage"] = self.fields["percentage"].to_representation(
            fraction_to_percent(instance.percentage)
        )
        return data


class PayrollPeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=MIN_YEAR)


class PayslipSerializer(serializers.ModelSerializer):
    employee_id = serializers.IntegerField(source="employee.id", read_only=True)
    employee_code = serializers.CharField(source="employee.code", read_only=True)
    employee_first_name = serializers.CharField(source="employee.first_name", read_only=True)
    employee_last_name = serializers.CharField(source="employee.last_name", read_only=True)

    class Meta:
        model = Payslip
        fields = [
            "id",
            "employee_id",
            "employee_code",
            "employee_first_name",
            "employee_last_name",
            "base_salary_at_generation",
            "house_amount",
            "transport_amount",
            "employee_taxed_amount",
            "pension_amount",
            "medical_insurance_amount",
            "other_taxed_amount",
            "total_deductions",
            "gross_salary",
            "net_salary",
            "month",
            "year",
            "status",
            "generation_date",
            "approval_date",
        ]
        read_only_fields = fields
