from django.db.models.signals import post_delete
from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from hrm.realtime.events.devices import device_deleted_message
from hrm.realtime.events.devices import device_saved_message
from hrm.realtime.handle import broadcast

from .models import HrmDevice


# Payloads are snapshotted when the signal fires; only the send waits for commit.
@receiver(post_save, sender=HrmDevice)
def broadcast_device_saved(sender, instance, created, **kwargs):
    event, payload = device_saved_message(instance, created=created)
    on_commit(lambda: broadcast(event, payload))


@receiver(post_delete, sender=HrmDevice)
def broadcast_device_deleted(sender, instance, **kwargs):
    # Django clears instance.pk after delete; capture it now.
    event, payload = device_deleted_message(instance, pk=instance.pk)
    on_commit(lambda: broadcast(event, payload))
