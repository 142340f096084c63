# -*- coding: utf-8 -*-
# accounts/enums.py
# Purpose: Authorization roles and marketplace personas

from django.db import models


class Role(models.IntegerChoices):
    ADMIN = 1, "Admin"
    NEWLY = 2, "Newly registered"
    SPECIALIST = 3, "Specialist"
    INVESTOR = 4, "Investor"
    INITIATOR = 5, "Initiator"


# Personas a user may switch between (User.last_role_id)
PERSONA_ROLES = (Role.NEWLY, Role.SPECIALIST, Role.INVESTOR, Role.INITIATOR)
