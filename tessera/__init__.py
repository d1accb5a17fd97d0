"""
###########################################################################
``Tessera`` | Tileable noise by inverse distance weighting
###########################################################################

``Tessera`` is a Python package for scattered-data interpolation in
arbitrary dimensions by inverse distance weighting, and for synthesising
smooth, optionally tileable pseudo-random noise fields from
well-separated random points.

.. topic:: Licence Statement

    This program is free software: you can redistribute it and/or modify it
    under the terms of the GNU General Public License as published by the
    Free Software Foundation, either version 3 of the License, or (at your
    option) any later version.

    This program is distributed in the hope that it will be useful, but
    WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
    General Public License for more details.

    You should have received a copy of the GNU General Public License along
    with this program.  If not, see `<https://www.gnu.org/licenses/>`_.

"""
__description__ = "Tileable noise by inverse distance weighting."
__license__ = "GPLv3"
__version__ = "0.1.0"
