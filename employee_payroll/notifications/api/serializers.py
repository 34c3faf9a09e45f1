from rest_framework import serializers
from ..models import Message


class MessageSerializer(serializers.ModelSerializer):
    employee_id = serializers.IntegerField(source='employee.id', read_only=True)
    employee_code = serializers.CharField(source='employee.code', read_only=True)
    employee_first_name = serializers.CharField(source='employee.first_name', read_only=True)
    employee_last_name = serializers.CharField(source='employee.last_name', read_only=True)

    class Meta:
        model = Message
        fields = [
            'id', 'employee_id', 'employee_code', 'employee_first_name',
            'employee_last_name', 'message', 'month', 'year', 'sent_date',
        ]
        read_only_fields = fields
