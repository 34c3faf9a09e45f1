import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hr", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Deduction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("percentage", models.DecimalField(decimal_places=4, max_digits=5)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="PayrollPeriod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("month", models.PositiveSmallIntegerField()),
                ("year", models.PositiveSmallIntegerField()),
                ("last_generated_at", models.DateTimeField(blank=True, null=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("month", "year"), name="unique_payroll_period")
                ],
            },
        ),
        migrations.CreateModel(
            name="Payslip",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("base_salary_at_generation", models.DecimalField(decimal_places=2, max_digits=12)),
                ("house_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("transport_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("employee_taxed_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("pension_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("medical_insurance_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("other_taxed_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("total_deductions", models.DecimalField(decimal_places=2, max_digits=12)),
                ("gross_salary", models.DecimalField(decimal_places=2, max_digits=12)),
                ("net_salary", models.DecimalField(decimal_places=2, max_digits=12)),
                ("month", models.PositiveSmallIntegerField()),
                ("year", models.PositiveSmallIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("PAID", "Paid")], default="PENDING", max_length=10
                    ),
                ),
                ("generation_date", models.DateField()),
                ("approval_date", models.DateField(blank=True, null=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payslips",
                        to="hr.employee",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["month", "year"], name="payslip_period_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "month", "year"), name="unique_payslip_per_employee_period"
                    )
                ],
            },
        ),
    ]
