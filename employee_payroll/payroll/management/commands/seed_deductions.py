from decimal import Decimal

from django.core.management.base import BaseCommand
from employee_payroll.payroll.models import Deduction
from employee_payroll.payroll.services import calculator


class Command(BaseCommand):
    help = "Seed the deduction and allowance rules used by payroll generation"

    def handle(self, *args, **options):
        rules = [
            {"code": "TAX", "name": calculator.EMPLOYEE_TAX, "percentage": Decimal("0.10")},
            {"code": "PEN", "name": calculator.PENSION, "percentage": Decimal("0.03")},
            {"code": "MED", "name": calculator.MEDICAL_INSURANCE, "percentage": Decimal("0.02")},
            {"code": "OTH", "name": calculator.OTHERS, "percentage": Decimal("0.01")},
            {"code": "HOU", "name": calculator.HOUSING, "percentage": Decimal("0.14")},
            {"code": "TRA", "name": calculator.TRANSPORT, "percentage": Decimal("0.14")},
        ]

        for rule in rules:
            obj, created = Deduction.objects.get_or_create(
                name=rule["name"],
                defaults=rule,
            )

            if created:
                self.stdout.write(self.style.SUCCESS(f"Created {obj.name}"))
            else:
                self.stdout.write(f"{obj.name} already exists")
