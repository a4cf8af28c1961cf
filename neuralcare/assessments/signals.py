"""Signals for the assessments app."""

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from neuralcare.assessments.models import AssessmentResult


@receiver(post_save, sender=AssessmentResult)
def queue_insight_derivation(sender, instance, created, **kwargs):
    """Queue insight derivation once the new result is committed."""
    if not created:
        return

    from neuralcare.assessments.tasks import derive_insight_task

    result_id = instance.pk
    transaction.on_commit(lambda: derive_insight_task(result_id))
