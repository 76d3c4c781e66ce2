#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# translation_utils.py - Utilities for translation support
#
import gettext
import os

# Default for system install
locale_dir = '/usr/share/locale'

if 'HILICAT_LOCALEDIR' in os.environ:
    locale_dir = os.environ['HILICAT_LOCALEDIR']

# Configure the translation text domain for hilicat
gettext.bindtextdomain("hilicat", locale_dir)
gettext.textdomain("hilicat")

# Export _ directly as the translation function
_ = gettext.gettext
