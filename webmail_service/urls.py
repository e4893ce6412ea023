"""webmail_service URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""

from django.urls import path, include

from app_mailbox import urls as app_mailbox_urls

urlpatterns = [
    path('api/mail/', include(app_mailbox_urls)),
]
