from rest_framework import serializers
from backend.core.serializers import UserSummarySerializer
from .models import GroupPurchase, GroupPurchaseParticipant


class ParticipantSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = GroupPurchaseParticipant
        fields = ['id', 'user', 'quantity', 'status', 'joined_at']
        read_only_fields = ['joined_at']


class GroupPurchaseSerializer(serializers.ModelSerializer):
    creator = UserSummarySerializer(read_only=True)
    participant_count = serializers.SerializerMethodField()
    progress_percent = serializers.SerializerMethodField()
    target_quantity = serializers.IntegerField(min_value=1)

    class Meta:
        model = GroupPurchase
        fields = [
            'id', 'creator', 'title', 'description', 'product_url', 'image_url', 'target_quantity',
            'current_quantity', 'unit_price', 'discounted_unit_price', 'deadline', 'status',
            'vendor_name', 'vendor_contact', 'participant_count', 'progress_percent', 'created_at',
        ]
        read_only_fields = ['current_quantity', 'status', 'created_at']

    def get_participant_count(self, obj):
        return obj.participants.count()

    def get_progress_percent(self, obj):
        return obj.get_progress_percent()

    def validate(self, attrs):
        unit_price = attrs.get('unit_price', getattr(self.instance, 'unit_price', None))
        discounted = attrs.get('discounted_unit_price', getattr(self.instance, 'discounted_unit_price', None))
        if unit_price is not None and discounted is not None and discounted > unit_price:
            raise serializers.ValidationError({'discounted_unit_price': 'Discounted price cannot exceed the unit price.'})
        return attrs


class GroupPurchaseDetailSerializer(GroupPurchaseSerializer):
    participants = ParticipantSerializer(many=True, read_only=True)

    class Meta(GroupPurchaseSerializer.Meta):
        fields = GroupPurchaseSerializer.Meta.fields + ['participants']


class JoinSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, default=1)
    status = serializers.ChoiceField(choices=GroupPurchaseParticipant.STATUS_CHOICES, default='interested')


class ParticipantUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=GroupPurchaseParticipant.STATUS_CHOICES, required=False)
