"""
The **env** module provides a shared environment used by the different modules.
It stores globals such as the default portal and the sink that receives
usage warnings raised while building search queries.

portal
======

.. py:data:: portal
The sharing REST endpoint used by the URL helpers when neither an explicit
portal nor an authentication object naming one is given.

warning_handler
===============

.. py:data:: warning_handler
A callable accepting a single message string. When set, every usage warning
emitted by :class:`~arcgis_rest_portal.SearchQueryBuilder` instances without
their own sink is sent here instead of the ``arcgis_rest_portal`` logger.
"""

#: The sharing REST endpoint used when no portal is given explicitly.
portal = "https://www.arcgis.com/sharing/rest"

#: Callable receiving usage warnings. None logs them at WARNING level.
warning_handler = None
