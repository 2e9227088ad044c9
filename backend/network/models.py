from django.conf import settings
from django.db import models
from django.db.models import Q


class ConnectionQuerySet(models.QuerySet):
    def involving(self, user):
        return self.filter(Q(requester=user) | Q(recipient=user))

    def between(self, user_a, user_b):
        return self.filter(
            Q(requester=user_a, recipient=user_b) |
            Q(requester=user_b, recipient=user_a)
        )


class Connection(models.Model):
    """Friend-request style relationship between two professionals"""
    STATUS_PENDING = 'pending'
    STATUS_ACCEPTED = 'accepted'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_ACCEPTED, 'Accepted'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    requester = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_connections')
    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_connections')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ConnectionQuerySet.as_manager()

    class Meta:
        db_table = 'connections'
        ordering = ['-created_at']
        unique_together = ['requester', 'recipient']

    def __str__(self):
        return f"{self.requester} -> {self.recipient} ({self.status})"

    def other_user(self, user):
        return self.recipient if self.requester_id == user.pk else self.requester

    @classmethod
    def are_connected(cls, user_a, user_b):
        return cls.objects.between(user_a, user_b).filter(status=cls.STATUS_ACCEPTED).exists()


class Message(models.Model):
    """Direct message between two connected users"""
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='messages_unread_idx'),
        ]

    def __str__(self):
        return f"Message {self.pk} from {self.sender} to {self.recipient}"
