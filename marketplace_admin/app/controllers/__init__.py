"""
Page controllers.

A controller owns the state of one admin screen: the records on
display, the loading/error status, the current page and filters, or
the fields of a form.  Controllers call the services, decide what a
failed call means for their view and never raise for backend errors.
"""
